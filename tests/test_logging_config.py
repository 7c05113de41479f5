import logging

from balloonspots.logging_config import setup_logging


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_is_idempotent():
    logger = setup_logging(level=logging.DEBUG)
    setup_logging(level=logging.DEBUG)

    assert logger.name == "balloonspots"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    _close(logger)


def test_log_file_receives_package_records(tmp_path):
    log_file = tmp_path / "app.log"
    logger = setup_logging(level=logging.INFO, log_file=str(log_file))

    logging.getLogger("balloonspots.spots.manager").info("Black hole triggered")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized at INFO, file: " in text
    assert "balloonspots.spots.manager - INFO - Black hole triggered" in text
    _close(logger)


def test_re_setup_replaces_the_file_handler(tmp_path):
    first = tmp_path / "first.log"
    logger = setup_logging(log_file=str(first))
    setup_logging(level=logging.WARNING)

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert first.exists()
    _close(logger)
