"""
Game configuration.

Typed dataclasses whose defaults are the reference tuning of the game.
``load_settings`` overlays values from a YAML file; any key left out keeps
its default, so an empty file is a valid configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml


class ConfigError(ValueError):
    """Raised for a missing, unreadable or invalid settings file."""


@dataclass(frozen=True)
class EnergySettings:
    starting_rate: float = 0.5      # energy per second at t=0
    rate_step: float = 0.5          # added every `rate_interval_ms`
    rate_interval_ms: int = 15_000
    max_rate: float = 10.0
    starting_energy: float = 6.0
    max_energy: float = 25.0


@dataclass(frozen=True)
class EffectSettings:
    ice_penalty_ms: int = 2_000     # ice bishop: added to adjacent enemies
    rally_bonus_ms: int = 1_000     # rally pawn: removed from adjacent allies


@dataclass(frozen=True)
class AISettings:
    min_rating: int = 400
    max_rating: int = 2_800
    default_rating: int = 1_200
    idle_threshold_ms: int = 2_000  # "has not moved recently" for cooldown timing
    top_fraction: float = 0.3       # share of ranked moves sampled on a miss


@dataclass(frozen=True)
class SessionSettings:
    tick_interval_ms: int = 100


@dataclass(frozen=True)
class GameSettings:
    energy: EnergySettings = field(default_factory=EnergySettings)
    effects: EffectSettings = field(default_factory=EffectSettings)
    ai: AISettings = field(default_factory=AISettings)
    session: SessionSettings = field(default_factory=SessionSettings)


DEFAULT_SETTINGS = GameSettings()


def load_settings(path: str | Path) -> GameSettings:
    """
    Load and validate a YAML settings file.

    Raises:
        ConfigError: the file is missing, malformed, or holds invalid values.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Settings file not found: {cfg_path.resolve()}")

    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed settings file {cfg_path}: {exc}") from exc

    return settings_from_mapping(raw)


def settings_from_mapping(raw: dict[str, Any]) -> GameSettings:
    """Build :class:`GameSettings` from a plain mapping (parsed YAML/JSON)."""
    if not isinstance(raw, dict):
        raise ConfigError("Settings root must be a mapping")

    try:
        settings = GameSettings(
            energy=_section(EnergySettings, raw.get("energy")),
            effects=_section(EffectSettings, raw.get("effects")),
            ai=_section(AISettings, raw.get("ai")),
            session=_section(SessionSettings, raw.get("session")),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc

    _validate(settings)
    return settings


def _section(cls: type, raw: object) -> Any:
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ConfigError(f"Section for {cls.__name__} must be a mapping")

    known = {f.name: f for f in fields(cls)}
    unknown = set(raw) - set(known)
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")

    defaults = cls()
    values = {}
    for name, value in raw.items():
        values[name] = _coerce(f"{cls.__name__}.{name}", getattr(defaults, name), value)
    return cls(**values)


def _coerce(key: str, default: object, value: object) -> Any:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    if isinstance(default, int) and isinstance(value, float) and not value.is_integer():
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return type(default)(value)


def _validate(settings: GameSettings) -> None:
    energy = settings.energy
    if energy.rate_interval_ms <= 0:
        raise ConfigError("energy.rate_interval_ms must be > 0")
    if energy.starting_rate < 0 or energy.rate_step < 0:
        raise ConfigError("energy rates must be >= 0")
    if energy.max_rate < energy.starting_rate:
        raise ConfigError("energy.max_rate must be >= energy.starting_rate")
    if not 0 <= energy.starting_energy <= energy.max_energy:
        raise ConfigError("energy.starting_energy must be within [0, max_energy]")

    if settings.effects.ice_penalty_ms < 0 or settings.effects.rally_bonus_ms < 0:
        raise ConfigError("effect amounts must be >= 0")

    ai = settings.ai
    if not ai.min_rating <= ai.default_rating <= ai.max_rating:
        raise ConfigError("ai.default_rating must be within [min_rating, max_rating]")
    if not 0 < ai.top_fraction <= 1:
        raise ConfigError("ai.top_fraction must be within (0, 1]")

    if settings.session.tick_interval_ms <= 0:
        raise ConfigError("session.tick_interval_ms must be > 0")
