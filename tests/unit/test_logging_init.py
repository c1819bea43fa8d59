from __future__ import annotations

import logging
from io import StringIO

import activity_mapper.logging.init as log_init
from activity_mapper.logging.init import LabeledFormatter, get_logger, setup_logging


def test_setup_logging_is_idempotent():
    log_init.reset_logging()
    logger = setup_logging()
    assert logger.name == "activity_mapper"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert setup_logging() is logger
    assert get_logger() is logger


def test_labeled_prefixes():
    captured = StringIO()
    logger = logging.getLogger("test_activity_mapper_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("info message")
    logger.warning("warning message")
    logger.error("error message")
    logger.log(log_init.SUMMARY_LEVEL, "summary message")

    assert captured.getvalue().strip().split("\n") == [
        "INFO info message",
        "WARN warning message",
        "ERROR error message",
        "SUMMARY summary message",
    ]


def test_module_loggers_propagate_to_application_logger():
    log_init.reset_logging()
    app_logger = setup_logging()
    captured = StringIO()
    app_logger.handlers[0].setStream(captured)

    logging.getLogger("activity_mapper.services.addresses").warning("could not geocode address: 'x'")
    log_init.log_summary("individuals=1")

    assert captured.getvalue().splitlines() == [
        "WARN could not geocode address: 'x'",
        "SUMMARY individuals=1",
    ]
    log_init.reset_logging()
