from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.rule import DEFAULT_SIGNATURES, PersonalDataRule

"""Config loader.

Responsibilities:
- Resolve the config path (--config, SANITIZER_CONFIG, config/sanitizer.yml)
- Load YAML and validate it against the bundled JSON schema
- Apply defaults for missing keys
"""

__all__ = [
    "ConfigError",
    "SanitizerConfig",
    "load_config",
    "resolve_config_path",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/sanitizer.yml")
CONFIG_ENV_VAR = "SANITIZER_CONFIG"

MALFORMED_FAIL = "fail"
MALFORMED_SKIP = "skip"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class SanitizerConfig:
    personal_data_signatures: frozenset[str] = DEFAULT_SIGNATURES
    malformed_policy: str = MALFORMED_FAIL  # fail | skip
    error_log_dir: str = "./logs"

    @property
    def rule(self) -> PersonalDataRule:
        return PersonalDataRule(signatures=self.personal_data_signatures)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing / invalid, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: str | Path | None = None) -> Path | None:
    """Pick the config file to load.

    Priority: explicit option, ``SANITIZER_CONFIG``, ``config/sanitizer.yml``
    (only if present). ``None`` means "use built-in defaults". A path named
    explicitly or via the environment must exist (checked by load_config).
    """
    if explicit:
        return Path(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_config(path: Path | None) -> SanitizerConfig:
    """Load and validate a config file. ``path=None`` returns the defaults."""
    if path is None:
        return SanitizerConfig()
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    signatures = data.get("personal_data_signatures")
    return SanitizerConfig(
        personal_data_signatures=frozenset(signatures) if signatures else DEFAULT_SIGNATURES,
        malformed_policy=data.get("malformed_policy", MALFORMED_FAIL),
        error_log_dir=data.get("error_log_dir", "./logs"),
    )
