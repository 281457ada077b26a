import logging

from simas_app.app_logger import ROOT_LOGGER_NAME, get_logger, setup_logging


def test_setup_logging_installs_single_handler():
    setup_logging("DEBUG")
    logger = setup_logging("WARNING")

    stream_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(stream_handlers) == 1
    assert logger.level == logging.WARNING
    assert logger.propagate is False


def test_get_logger_returns_child_of_root():
    assert get_logger("services.recap").name == f"{ROOT_LOGGER_NAME}.services.recap"
    assert get_logger().name == ROOT_LOGGER_NAME
