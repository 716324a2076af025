"""Configuration management for Nomina.

Three sections:
- selection: selector tuning (distinctness retries)
- generation: multi-suggestion limits and the optional recursion guard
- defaults: CLI defaults (locale, suggestion count)

Config resolution order (highest priority first):
1. Programmatic (NominaConfig constructed in code, installed with configure())
2. Environment variables (NOMINA_MAX_RETRIES, NOMINA_DEFAULT_LOCALE, etc.)
3. Config file (~/.config/nomina/config.json, managed by `nomina config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "nomina"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class SelectionConfig:
    """Selector tuning."""

    max_retries: int = 20


@dataclass
class GenerationConfig:
    """Engine limits.

    - max_suggestions: upper bound for ``n`` in one generate call
    - attempts_per_suggestion: attempt budget is ``n * attempts_per_suggestion``
    - max_recursion_depth: nested recipe depth limit; None = unlimited
    """

    max_suggestions: int = 100
    attempts_per_suggestion: int = 10
    max_recursion_depth: int | None = None


@dataclass
class DefaultsConfig:
    """CLI defaults."""

    locale: str = "en"
    count: int = 1


# =============================================================================
# Main config class
# =============================================================================

# env var -> (section, field, type)
_ENV_VARS: dict[str, tuple[str, str, type]] = {
    "NOMINA_MAX_RETRIES": ("selection", "max_retries", int),
    "NOMINA_MAX_SUGGESTIONS": ("generation", "max_suggestions", int),
    "NOMINA_ATTEMPTS_PER_SUGGESTION": ("generation", "attempts_per_suggestion", int),
    "NOMINA_MAX_RECURSION_DEPTH": ("generation", "max_recursion_depth", int),
    "NOMINA_DEFAULT_LOCALE": ("defaults", "locale", str),
    "NOMINA_DEFAULT_COUNT": ("defaults", "count", int),
}

_INT_FIELDS = {
    (section, name) for section, name, kind in _ENV_VARS.values() if kind is int
}


@dataclass
class NominaConfig:
    """Top-level nomina configuration.

    Construct programmatically for package use, or load from config file for CLI use.

    Examples:
        # Package use: no files needed
        config = NominaConfig(generation=GenerationConfig(max_recursion_depth=8))

        # CLI use: loads from ~/.config/nomina/config.json
        config = NominaConfig.load()
    """

    selection: SelectionConfig = field(default_factory=SelectionConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls) -> "NominaConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        for env_name, (section, name, kind) in _ENV_VARS.items():
            if val := os.environ.get(env_name):
                try:
                    setattr(getattr(config, section), name, kind(val))
                except ValueError:
                    logger.warning("Invalid %s=%r, ignoring", env_name, val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/nomina/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "selection": asdict(self.selection),
            "generation": asdict(self.generation),
            "defaults": asdict(self.defaults),
        }

    def set_value(self, key: str, value: Any) -> None:
        """Set a dotted ``section.field`` key, coercing ints.

        Raises:
            KeyError: If the section or field does not exist
            ValueError: If an integer field gets a non-integer value
        """
        section_name, _, name = key.partition(".")
        section = getattr(self, section_name, None)
        if section is None or not name or not hasattr(section, name):
            raise KeyError(key)
        setattr(section, name, _coerce(section_name, name, value))


# =============================================================================
# Config dict application
# =============================================================================


def _coerce(section: str, name: str, value: Any) -> Any:
    if (section, name) in _INT_FIELDS:
        if value is None or value in ("", "none", "None"):
            if name == "max_recursion_depth":
                return None
            raise ValueError(f"{section}.{name} requires an integer")
        return int(value)
    return value


def _apply_dict(config: NominaConfig, data: dict) -> None:
    """Apply a dict of values onto a NominaConfig."""
    for section_name in ("selection", "generation", "defaults"):
        values = data.get(section_name)
        if not isinstance(values, dict):
            continue
        section = getattr(config, section_name)
        for k, v in values.items():
            if hasattr(section, k):
                try:
                    setattr(section, k, _coerce(section_name, k, v))
                except (TypeError, ValueError):
                    logger.warning(
                        "Invalid %s.%s=%r in %s, ignoring",
                        section_name,
                        k,
                        v,
                        CONFIG_FILE,
                    )


# =============================================================================
# Global config singleton
# =============================================================================

_config: NominaConfig | None = None


def get_config() -> NominaConfig:
    """Get the global NominaConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = NominaConfig.load()
    return _config


def configure(config: NominaConfig) -> None:
    """Set the global NominaConfig programmatically.

    Use this when nomina is used as a package:
        from nomina.config import configure, NominaConfig, SelectionConfig
        configure(NominaConfig(selection=SelectionConfig(max_retries=50)))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
