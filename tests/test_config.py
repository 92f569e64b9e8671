"""Tests for settings loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from tempochess.config import (
    DEFAULT_SETTINGS,
    ConfigError,
    load_settings,
    settings_from_mapping,
)


class TestDefaults:
    def test_reference_values(self) -> None:
        energy = DEFAULT_SETTINGS.energy
        assert energy.starting_rate == 0.5
        assert energy.rate_step == 0.5
        assert energy.rate_interval_ms == 15_000
        assert energy.max_rate == 10.0
        assert energy.starting_energy == 6.0
        assert energy.max_energy == 25.0
        assert DEFAULT_SETTINGS.effects.ice_penalty_ms == 2_000
        assert DEFAULT_SETTINGS.effects.rally_bonus_ms == 1_000
        assert DEFAULT_SETTINGS.session.tick_interval_ms == 100

    def test_empty_mapping(self) -> None:
        assert settings_from_mapping({}) == DEFAULT_SETTINGS


class TestLoadSettings:
    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "tempo.yaml"
        path.write_text(
            "energy:\n  max_energy: 30\n  starting_energy: 10\n"
            "ai:\n  default_rating: 1800\n",
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.energy.max_energy == 30.0
        assert settings.energy.starting_energy == 10.0
        assert settings.energy.max_rate == 10.0
        assert settings.ai.default_rating == 1800
        assert settings.effects == DEFAULT_SETTINGS.effects

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("energy: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_settings(path)


class TestValidation:
    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError):
            settings_from_mapping({"energy": {"turbo": 1}})

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ConfigError):
            settings_from_mapping({"ai": 5})

    def test_bad_type(self) -> None:
        with pytest.raises(ConfigError):
            settings_from_mapping({"session": {"tick_interval_ms": "fast"}})

    @pytest.mark.parametrize(
        "raw",
        [
            {"energy": {"starting_energy": 40}},
            {"energy": {"rate_interval_ms": 0}},
            {"energy": {"max_rate": 0.1}},
            {"effects": {"ice_penalty_ms": -1}},
            {"ai": {"default_rating": 100}},
            {"ai": {"top_fraction": 0}},
            {"session": {"tick_interval_ms": 0}},
        ],
    )
    def test_invalid_values(self, raw: dict[str, dict[str, object]]) -> None:
        with pytest.raises(ConfigError):
            settings_from_mapping(raw)

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)

    @pytest.mark.parametrize(
        "raw",
        [
            {"energy": {"rate_interval_ms": 1.7}},
            {"session": {"tick_interval_ms": True}},
            {"energy": {"max_energy": False}},
        ],
    )
    def test_int_fields_reject_fractions_and_booleans(
        self, raw: dict[str, dict[str, object]]
    ) -> None:
        with pytest.raises(ConfigError):
            settings_from_mapping(raw)

    def test_integral_float_accepted_for_int_field(self) -> None:
        settings = settings_from_mapping({"session": {"tick_interval_ms": 50.0}})
        assert settings.session.tick_interval_ms == 50
        assert isinstance(settings.session.tick_interval_ms, int)
