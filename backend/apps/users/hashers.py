from django.conf import settings
from django.contrib.auth.hashers import BCryptSHA256PasswordHasher


class ConfigurableBCryptSHA256PasswordHasher(BCryptSHA256PasswordHasher):
    """bcrypt_sha256 hasher whose cost factor comes from ``settings.BCRYPT_ROUNDS``.

    Shares the ``bcrypt_sha256`` algorithm name, so hashes stay verifiable by the
    stock hasher and ``must_update`` re-hashes passwords when the cost changes.
    """

    @property
    def rounds(self):
        return int(getattr(settings, "BCRYPT_ROUNDS", 12))
