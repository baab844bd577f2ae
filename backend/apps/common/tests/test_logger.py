import logging

from apps.common.logger import get_logger


def test_bound_context_is_rendered_after_message(caplog):
    log = get_logger("apps.tests.logger").bind(component="catalog", layer="service")
    with caplog.at_level(logging.INFO, logger="apps.tests.logger"):
        log.info("Category created", category_id=7)
    assert caplog.records[-1].getMessage() == (
        "Category created | component=catalog layer=service category_id=7"
    )


def test_bind_does_not_mutate_parent_context():
    parent = get_logger("apps.tests.logger", component="users")
    child = parent.bind(view="UserListView")
    assert parent.context == {"component": "users"}
    assert child.context == {"component": "users", "view": "UserListView"}


def test_none_values_are_omitted(caplog):
    log = get_logger("apps.tests.logger")
    with caplog.at_level(logging.WARNING, logger="apps.tests.logger"):
        log.warning("Lookup failed", user_id=None)
    assert caplog.records[-1].getMessage() == "Lookup failed"


def test_exception_attaches_traceback(caplog):
    log = get_logger("apps.tests.logger")
    with caplog.at_level(logging.ERROR, logger="apps.tests.logger"):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            log.exception("Unhandled", path="/categories")
    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.exc_info is not None
