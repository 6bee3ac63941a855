"""Engine settings and minimal helpers for loading environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Final, Iterable, Mapping

__all__ = [
    "ConfigError",
    "DEFAULT_SETTINGS",
    "ENV_PREFIX",
    "EngineSettings",
    "load_env_file",
    "load_settings",
    "parse_bool",
]

ENV_PREFIX: Final = "CALGRID_"


class ConfigError(RuntimeError):
    """Raised when configuration values are malformed."""


@dataclass(frozen=True)
class EngineSettings:
    """Tunable constants shared by the layout primitives."""

    fallback_min_hour: int = 8
    fallback_max_hour: int = 18
    min_span_hours: int = 8
    max_extended_hour: int = 29
    midnight_carry_hour: int = 6
    min_height_hours: float = 0.5
    default_duration_minutes: int = 60
    column_gutter: float = 0.0
    month_max_per_day: int = 2
    cell_max_per_day: int = 3
    week_start: int = 0
    tick_seconds: int = 60
    per_cluster_columns: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.fallback_min_hour < self.fallback_max_hour <= self.max_extended_hour:
            raise ConfigError(
                "Fallback window must satisfy 0 <= min < max <= max_extended_hour "
                f"(got {self.fallback_min_hour}-{self.fallback_max_hour})."
            )
        if not 0 < self.min_span_hours <= self.max_extended_hour:
            raise ConfigError(f"min_span_hours out of range: {self.min_span_hours}")
        if not 0 <= self.week_start <= 6:
            raise ConfigError(f"week_start must be a weekday index 0-6, got {self.week_start}")
        if self.min_height_hours < 0 or self.default_duration_minutes < 0:
            raise ConfigError("Durations and heights must not be negative.")
        if not 0 <= self.column_gutter < 1:
            raise ConfigError(f"column_gutter must be within [0, 1), got {self.column_gutter}")
        if self.month_max_per_day < 0 or self.cell_max_per_day < 0:
            raise ConfigError("Per-day event limits must not be negative.")
        if self.tick_seconds <= 0:
            raise ConfigError("tick_seconds must be positive.")


DEFAULT_SETTINGS: Final[EngineSettings] = EngineSettings()


def load_env_file(env_file: str | Path | None = None) -> None:
    """Load environment variables from ``env_file`` if provided.

    When ``env_file`` is :data:`None`, the loader looks for a ``.env`` file in the
    current working directory. Existing environment variables are never overwritten.
    """

    path = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if not path.exists() or not path.is_file():
        return

    for key, value in _iter_env_entries(path):
        os.environ.setdefault(key, value)


def load_settings(
    env_file: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    base: EngineSettings = DEFAULT_SETTINGS,
) -> EngineSettings:
    """Build :class:`EngineSettings` from ``CALGRID_*`` environment variables.

    ``environ`` defaults to :data:`os.environ` after ``env_file`` has been loaded.
    Variables that are not set keep the value from ``base``. For example
    ``CALGRID_MONTH_MAX_PER_DAY=3`` overrides ``month_max_per_day``.
    """

    if environ is None:
        load_env_file(env_file)
        environ = os.environ

    overrides: dict[str, object] = {}
    for field in fields(EngineSettings):
        raw = environ.get(ENV_PREFIX + field.name.upper())
        if raw is None or raw.strip() == "":
            continue
        overrides[field.name] = _coerce(field.name, raw.strip(), type(getattr(base, field.name)))

    return replace(base, **overrides)


def parse_bool(raw: str) -> bool | None:
    """Read a boolean flag such as ``"yes"`` or ``"0"``; ``None`` when unrecognised."""

    lowered = raw.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return None


def _coerce(name: str, raw: str, kind: type) -> object:
    if kind is bool:
        flag = parse_bool(raw)
        if flag is not None:
            return flag
        raise ConfigError(f"{ENV_PREFIX}{name.upper()} expects a boolean, got {raw!r}")
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(
            f"{ENV_PREFIX}{name.upper()} expects {kind.__name__}, got {raw!r}"
        ) from exc


def _iter_env_entries(path: Path) -> Iterable[tuple[str, str]]:
    for raw_line in path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ConfigError(
                f"Invalid line in {path.name!r}: {raw_line!r}. Expected KEY=VALUE format."
            )
        key, raw_value = line.split("=", 1)
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if not key:
            raise ConfigError(f"Environment variable key is missing in line: {raw_line!r}")
        yield key, value
