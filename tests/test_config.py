# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

import logging
import random

import pytest

from shapecheck import validate
from shapecheck.config import RANDOM_SEED_ENV, WARN_UNKNOWN_ENV, Settings, get_settings, parse_seed, reset_settings
from shapecheck.exceptions import ConfigurationError
from shapecheck.runtime import get_evaluator


def test_defaults_without_environment():
    assert Settings.from_env() == Settings(random_seed=None, warn_unknown=False)


def test_seed_is_parsed(monkeypatch):
    monkeypatch.setenv(RANDOM_SEED_ENV, " 42 ")

    assert Settings.from_env().random_seed == 42


def test_parse_seed_rejects_non_integers():
    assert parse_seed("") is None
    assert parse_seed(" 7 ") == 7
    with pytest.raises(ConfigurationError, match=RANDOM_SEED_ENV):
        parse_seed("forty-two")


def test_invalid_seed_falls_back_to_unseeded(monkeypatch, caplog):
    monkeypatch.setenv(RANDOM_SEED_ENV, "forty-two")

    with caplog.at_level(logging.WARNING, logger="shapecheck.config"):
        settings = Settings.from_env()

    assert settings.random_seed is None
    assert any(RANDOM_SEED_ENV in message for message in caplog.messages)


@pytest.mark.parametrize("raw,expected", [("1", True), ("true", True), ("yes", True), ("0", False), ("FALSE", False), ("no", False), ("", False)])
def test_warn_unknown_flag(monkeypatch, raw, expected):
    monkeypatch.setenv(WARN_UNKNOWN_ENV, raw)

    assert Settings.from_env().warn_unknown is expected


def test_settings_are_cached_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv(RANDOM_SEED_ENV, "7")

    assert get_settings() is first
    reset_settings()
    assert get_settings().random_seed == 7


def test_evaluator_is_seeded_from_environment(monkeypatch):
    monkeypatch.setenv(RANDOM_SEED_ENV, "42")

    assert get_evaluator().rng.random() == random.Random(42).random()


def test_invalid_seed_never_reaches_validate_callers(monkeypatch):
    monkeypatch.setenv(RANDOM_SEED_ENV, "abc")

    assert validate(5, "min=1") == ""
    assert validate(0, "min=1") == "Constraint Error: Number 0 is less than range minimum of 1"
    assert validate([1, 2, 3], "each(number,positive),checkType=random(2)") == ""
    assert get_evaluator().rng is not None


def test_no_constraint_passes_with_invalid_seed(monkeypatch):
    monkeypatch.setenv(RANDOM_SEED_ENV, "abc")

    assert validate(1, "") == ""
