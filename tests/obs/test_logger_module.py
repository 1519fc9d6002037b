"""Tests for :mod:`graphvault.obs.logger`."""

from __future__ import annotations

import logging

import pytest

from graphvault.obs.logger import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("graphvault")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def test_configure_logging_uses_environment_level(monkeypatch, package_logger):
    package_logger.handlers = []
    monkeypatch.setenv("LOG_LEVEL", "warn")

    configured = configure_logging()

    assert configured is package_logger
    assert configured.level == logging.WARNING
    assert len(configured.handlers) == 1


def test_configure_logging_defaults_to_error(package_logger):
    package_logger.handlers = []

    assert configure_logging().level == logging.ERROR


def test_configure_logging_adds_handler_once(package_logger):
    package_logger.handlers = []

    configure_logging(logging.DEBUG)
    configured = configure_logging(logging.INFO)

    assert configured.level == logging.INFO
    assert len(configured.handlers) == 1
