"""
Logging setup: console filtering and the optional debug log file.
"""
import logging

import pytest

from rentdesk.logging_setup import _ThirdPartyNoiseFilter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield root
    # pytest re-attaches its own capture handlers per phase
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def record(name, level):
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    "name, level, kept",
    [
        ("rentdesk.services.scheduler", logging.DEBUG, True),
        ("uvicorn.access", logging.INFO, True),
        ("sqlalchemy.engine", logging.INFO, False),
        ("sqlalchemy.engine", logging.WARNING, True),
        ("py.warnings", logging.WARNING, False),
        ("py.warnings", logging.ERROR, True),
    ],
)
def test_noise_filter(name, level, kept):
    assert _ThirdPartyNoiseFilter().filter(record(name, level)) is kept


def test_log_file_receives_debug(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "rentdesk.log"

    setup_logging("WARNING", str(log_file))
    logging.getLogger("rentdesk.test").debug("reminder pass started")
    for h in restore_root_logger.handlers:
        h.flush()

    assert "DEBUG rentdesk.test: reminder pass started" in log_file.read_text(encoding="utf-8")
    assert len(restore_root_logger.handlers) == 2
