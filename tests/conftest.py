"""Pytest configuration and shared fixtures for klaw-enum tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from klaw_enum import _config as config_module
from klaw_enum import EnumConfig, VariantFactory, enum
from klaw_enum._logging import LOGGER_NAME

from tests.models import Point, Ready


@pytest.fixture
def finished_at() -> datetime:
    return datetime(2024, 5, 1, 12, 30, tzinfo=UTC)


@pytest.fixture
def status() -> VariantFactory:
    """Closed Status enum: Loading (unit) | Ready(Ready)."""
    return enum('Status', {'Loading': None, 'Ready': Ready})


@pytest.fixture
def shape() -> VariantFactory:
    """Closed Shape enum with simple payloads."""
    return enum('Shape', Circle=float, Square=float, Dot=Point, Empty=None)


@pytest.fixture
def dynamic() -> VariantFactory:
    """Dynamic factory: accepts any non-reserved tag."""
    return VariantFactory(name='Events')


@pytest.fixture
def config() -> Generator[None]:
    """Reset the global configuration around a test."""
    config_module._config = None
    yield
    config_module._config = None


@pytest.fixture
def validating(config: None) -> EnumConfig:
    """Enable payload validation for the duration of a test."""
    return config_module.init(validate_payloads=True)


@pytest.fixture
def package_logger() -> Generator[logging.Logger]:
    """Restore the klaw_enum logger's handlers and level after a test."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
