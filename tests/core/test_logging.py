"""Tests for mizan.core.utils.logging."""

import os

from loguru import logger

from mizan.core.config import Config
from mizan.core.utils.logging import setup_logging, setup_logging_from_config


def test_log_file_written(tmp_dir):
    log_path = os.path.join(tmp_dir, "mizan.log")
    setup_logging(level="INFO", log_file=log_path)
    try:
        logger.info("net worth below nisab")
        logger.debug("not recorded")
    finally:
        logger.remove()

    with open(log_path) as f:
        contents = f.read()
    assert "net worth below nisab" in contents
    assert "not recorded" not in contents


def test_from_config(tmp_dir):
    log_path = os.path.join(tmp_dir, "configured.log")
    config = Config()
    config.set("logging.level", "debug")
    config.set("logging.file", log_path)

    setup_logging_from_config(config)
    try:
        logger.debug("configured debug line")
    finally:
        logger.remove()

    with open(log_path) as f:
        assert "configured debug line" in f.read()
