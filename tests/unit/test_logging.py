"""Unit tests for logging configuration."""

import json
import logging

import pytest
from json_log_formatter import JSONFormatter

from lumberjack.core.logging import StructuredFormatter, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("lumberjack")
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def make_record(message, **extra):
    record = logging.LogRecord("lumberjack.pipe", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_includes_context():
    record = make_record(
        "Applied double",
        step=3,
        logger_type="cellwise",
        context={"rows": 10},
    )

    assert StructuredFormatter().format(record) == "[INFO] step=3 logger=cellwise rows=10 Applied double"


def test_structured_formatter_plain_message():
    assert StructuredFormatter().format(make_record("hello")) == "[INFO] hello"


def test_configure_logging_installs_single_handler(package_logger):
    configure_logging(level="DEBUG")
    configure_logging(level="DEBUG")

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1
    assert isinstance(package_logger.handlers[0].formatter, StructuredFormatter)


def test_configure_logging_json(package_logger):
    configure_logging(json_format=True)

    assert isinstance(package_logger.handlers[0].formatter, JSONFormatter)


def test_pipeline_name_is_stamped(package_logger, capsys):
    configure_logging(level="INFO", pipeline_name="iris")
    logging.getLogger("lumberjack.api").info("started")

    assert "[INFO] pipeline=iris started" in capsys.readouterr().out


def test_json_output_is_parseable(package_logger, capsys):
    configure_logging(json_format=True)
    logging.getLogger("lumberjack.api").info("started")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert json.loads(line)["message"] == "started"
