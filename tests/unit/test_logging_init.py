from __future__ import annotations

import logging
from io import StringIO

import lms_csv.logging.init
from lms_csv.logging.init import LabeledFormatter, log_summary, reset_logging, setup_logging


def test_setup_logging_creates_logger_with_labeled_formatter():
    reset_logging()
    logger = setup_logging()

    assert logger.name == "lms_csv"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    reset_logging()
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1


def test_reset_then_setup_does_not_duplicate_handlers():
    reset_logging()
    setup_logging()
    reset_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_logging_labeled_prefixes():
    lms_csv.logging.init.reset_logging()
    captured_output = StringIO()

    logger = logging.getLogger("test_lms_csv_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")

    handler = logging.StreamHandler(captured_output)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_module_loggers_reach_application_handler(capsys):
    reset_logging()
    setup_logging()
    logging.getLogger("lms_csv.services.orchestrator").info("from module")
    assert "INFO from module" in capsys.readouterr().out


def test_log_summary(capsys):
    reset_logging()
    setup_logging()
    log_summary("files=0 valid=0")
    assert "SUMMARY files=0 valid=0" in capsys.readouterr().out


def test_setup_logging_custom_stream(capsys):
    reset_logging()
    stream = StringIO()
    setup_logging(stream)
    log_summary("files=1")
    assert stream.getvalue() == "SUMMARY files=1\n"
    assert capsys.readouterr().out == ""
    reset_logging()
