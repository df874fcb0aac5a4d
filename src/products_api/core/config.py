from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_CONFIG_FILE = ".products-api.toml"
_TOOL_SECTION = "products-api"

_LOG_LEVELS = frozenset({"critical", "error", "warning", "info", "debug"})


class ConfigError(ValueError):
    """Raised when a config file contains an invalid value."""


@dataclass(frozen=True)
class ApiConfig:
    """Runtime settings for the products API.

    Can be loaded from ``.products-api.toml`` or
    ``pyproject.toml [tool.products-api]`` via :func:`load_config`.

    Example ``pyproject.toml``::

        [tool.products-api]
        profile = "fast"
        port = 8080
        log_level = "debug"

    """

    # --- Server ---

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    # --- Simulated latency ---

    service_delay: float = 2.0
    """Seconds each feature service sleeps before returning its canned result."""

    rule_delay: float = 1.0
    """Seconds the asynchronous ``name`` rule sleeps before answering."""

    # --- Validation ---

    concurrent_rules: bool = True
    """Await the rules of one ruleset together instead of one by one."""

    def __post_init__(self) -> None:
        if self.log_level not in _LOG_LEVELS:
            known = ", ".join(sorted(_LOG_LEVELS))
            raise ConfigError(f"Unknown log_level {self.log_level!r}. Known levels: {known}")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.service_delay < 0 or self.rule_delay < 0:
            raise ConfigError("delays must not be negative")

    @property
    def logging_level(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level.upper()]


BUILTIN_PROFILES: dict[str, ApiConfig] = {
    "default": ApiConfig(),
    "fast": ApiConfig(service_delay=0.0, rule_delay=0.0),
}

_KNOWN_KEYS = frozenset({"profile"} | {f.name for f in dataclasses.fields(ApiConfig)})


def load_config(path: Path | str | None = None) -> ApiConfig:
    """Load the API settings.

    An explicit *path* may point at a ``.products-api.toml`` file or at a
    ``pyproject.toml`` carrying a ``[tool.products-api]`` table; a missing file
    means "use the defaults".  Without *path*, the settings file nearest to the
    working directory is used (see :func:`_find_config`).

    Raises:
        :class:`ConfigError`: On malformed TOML, unknown keys or bad values.

    """
    if path is None:
        return _parse_config(_find_config())

    resolved = Path(path)
    if not resolved.exists():
        return ApiConfig()
    return _parse_config(_read_file(resolved))


def _find_config() -> dict[str, Any]:
    """Settings from the closest directory, starting at the CWD.

    In each directory a dedicated ``.products-api.toml`` beats
    ``pyproject.toml``.  The first ``pyproject.toml`` found ends the search even
    without a ``[tool.products-api]`` table, so an enclosing checkout never
    leaks its settings into this one.
    """
    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        for candidate in (directory / _CONFIG_FILE, directory / "pyproject.toml"):
            if candidate.is_file():
                return _read_file(candidate)
    return {}


def _read_file(path: Path) -> dict[str, Any]:
    """Return the products-api table of *path*, rejecting keys it does not know."""
    try:
        raw: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if path.name == "pyproject.toml":
        raw = raw.get("tool", {}).get(_TOOL_SECTION, {})

    if unknown := sorted(set(raw) - _KNOWN_KEYS):
        raise ConfigError(f"Unknown setting(s) in {path}: {', '.join(unknown)}")
    return raw


def _parse_config(data: dict[str, Any]) -> ApiConfig:
    """Parse a raw key/value dict into :class:`ApiConfig`.

    ``profile`` selects a :data:`BUILTIN_PROFILES` entry as the base; explicit
    keys override it.
    """
    if (profile_name := data.get("profile")) is not None:
        base = BUILTIN_PROFILES.get(str(profile_name))
        if base is None:
            known = ", ".join(f'"{p}"' for p in BUILTIN_PROFILES)
            raise ConfigError(f"Unknown profile {profile_name!r}. Known profiles: {known}")
    else:
        base = ApiConfig()

    kwargs: dict[str, Any] = {}
    try:
        if (v := data.get("host")) is not None:
            kwargs["host"] = str(v)
        if (v := data.get("port")) is not None:
            kwargs["port"] = int(v)
        if (v := data.get("log_level")) is not None:
            kwargs["log_level"] = str(v).lower()
        if (v := data.get("service_delay")) is not None:
            kwargs["service_delay"] = float(v)
        if (v := data.get("rule_delay")) is not None:
            kwargs["rule_delay"] = float(v)
    except (ValueError, TypeError) as exc:
        raise ConfigError(str(exc)) from exc

    if (flag := data.get("concurrent_rules")) is not None:
        if not isinstance(flag, bool):
            raise ConfigError(f"concurrent_rules must be true or false, got {flag!r}")
        kwargs["concurrent_rules"] = flag

    return dataclasses.replace(base, **kwargs)
