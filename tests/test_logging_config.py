"""Root logger setup."""
import logging

import pytest

from service_order_api.app.core.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture(name="bare_root")
def bare_root_fixture():
    """Run with a root logger that has no handlers, restoring it afterwards."""
    root = logging.getLogger()
    package = logging.getLogger(PACKAGE_LOGGER)
    saved_handlers, saved_level, saved_package_level = root.handlers[:], root.level, package.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    package.setLevel(saved_package_level)


def test_console_handler_and_level(bare_root):
    setup_logging("warning")

    assert bare_root.level == logging.WARNING
    assert len(bare_root.handlers) == 1
    assert isinstance(bare_root.handlers[0], logging.StreamHandler)


def test_unknown_level_falls_back_to_info(bare_root):
    setup_logging("chatty")
    assert bare_root.level == logging.INFO


def test_file_handler_added(bare_root, tmp_path):
    logfile = tmp_path / "report.log"
    setup_logging("INFO", str(logfile))

    logging.getLogger("service_order_api.test").info("report built")
    for handler in bare_root.handlers:
        handler.flush()

    assert any(isinstance(h, logging.FileHandler) for h in bare_root.handlers)
    assert "[INFO] service_order_api.test: report built" in logfile.read_text(encoding="utf-8")


def test_debug_lowers_package_logger_only(bare_root):
    setup_logging("INFO", debug=True)

    assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
    assert bare_root.level == logging.INFO


def test_second_call_is_noop(bare_root):
    setup_logging("INFO")
    setup_logging("DEBUG")

    assert bare_root.level == logging.INFO
    assert len(bare_root.handlers) == 1
