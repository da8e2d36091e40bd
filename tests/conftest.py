"""Общие фикстуры: каждый тест стартует с конфигурацией по умолчанию."""

import pytest

from src.modes.config import reset_config


@pytest.fixture(autouse=True)
def default_decimal_config():
    """Сброс DecimalConfig до и после теста."""
    reset_config()
    yield
    reset_config()
