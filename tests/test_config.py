import logging

import pytest

from schema_guard import JsonSchemaValidator
from schema_guard.config import ValidatorConfig
from schema_guard.exceptions import ConfigurationError


def test_defaults(monkeypatch) -> None:
    for name in (
        "SCHEMA_GUARD_REGEX_CACHE_SIZE",
        "SCHEMA_GUARD_LOG_LEVEL",
        "SCHEMA_GUARD_PRINT_LEVEL",
        "SCHEMA_GUARD_CACHE_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    config = ValidatorConfig.from_env()
    assert config == ValidatorConfig(regex_cache_size=100, log_level="INFO", print_level="ERROR", cache_enabled=True)


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("SCHEMA_GUARD_REGEX_CACHE_SIZE", "8")
    monkeypatch.setenv("SCHEMA_GUARD_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SCHEMA_GUARD_PRINT_LEVEL", "WARNING")
    monkeypatch.setenv("SCHEMA_GUARD_CACHE_ENABLED", "False")
    config = ValidatorConfig.from_env()
    assert config.regex_cache_size == 8
    assert config.log_level == "DEBUG"
    assert config.print_level == "WARNING"
    assert config.cache_enabled is False


def test_invalid_cache_size(monkeypatch) -> None:
    monkeypatch.setenv("SCHEMA_GUARD_REGEX_CACHE_SIZE", "many")
    with pytest.raises(ConfigurationError):
        ValidatorConfig.from_env()
    with pytest.raises(ConfigurationError):
        ValidatorConfig(regex_cache_size=0)


def test_validator_cache_sized_from_config() -> None:
    validator = JsonSchemaValidator(config=ValidatorConfig(regex_cache_size=3))
    assert validator._regex_cache.capacity == 3


def test_set_logging_splits_streams() -> None:
    logger = ValidatorConfig(log_level="DEBUG", print_level="WARNING").set_logging()
    assert logger.name == "schema_guard"
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert [handler.level for handler in logger.handlers] == [logging.DEBUG, logging.WARNING]
