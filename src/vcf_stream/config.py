"""Configuration file support for vcf-stream."""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    """Options controlling how strictly VCF sources are parsed."""

    strict_vep: bool = True
    vep_field: str = "ANN"
    strict_genotypes: bool = False
    log_level: str = "INFO"


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

BOOLEAN_KEYS = ("strict_vep", "strict_genotypes")


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    for key in BOOLEAN_KEYS:
        if key in config_dict and not isinstance(config_dict[key], bool):
            raise ConfigValidationError(
                f"{key} must be a boolean, got {type(config_dict[key]).__name__}"
            )

    if "vep_field" in config_dict:
        vep_field = config_dict["vep_field"]
        if not isinstance(vep_field, str) or not vep_field:
            raise ConfigValidationError(f"vep_field must be a non-empty string, got {vep_field!r}")

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> ParserConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        ParserConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        toml_data = tomllib.load(f)

    config_dict = toml_data.get("vcf_stream", {})

    if overrides:
        config_dict.update(overrides)

    validate_config(config_dict)

    valid_fields = {"strict_vep", "vep_field", "strict_genotypes", "log_level"}
    ignored = sorted(set(config_dict) - valid_fields)
    if ignored:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(ignored))

    filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}

    return ParserConfig(**filtered_config)
