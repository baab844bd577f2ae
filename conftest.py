import os
import sys

# backend/ holds the `apps` and `dscatalog` packages; make them importable from the repo root
BACKEND_DIR = os.path.join(os.path.dirname(__file__), "backend")
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "dscatalog.settings")
