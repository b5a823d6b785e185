"""Import configuration loaded from environment variables.

All configuration values have defaults matching the production storage
layout. ``from_env()`` raises ``ConfigValidationError`` if any value is
out of its valid range, so bad configuration is caught before the first
document is fetched.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from range_maps.core.constants import (
    DEFAULT_INPUT_CONTAINER,
    DEFAULT_OUTPUT_CONTAINER,
    DEFAULT_PROVENANCE,
)
from range_maps.core.exceptions import RangeMapError


class ConfigValidationError(RangeMapError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Immutable importer configuration.

    Attributes:
        input_container: Blob container with one folder of KML files per species.
        output_container: Blob container receiving the converted GeoJSON.
        source: Provenance tag written into every feature's properties.
        max_folders: Upper bound on species folders listed per run.
        max_files_per_folder: Upper bound on blobs inspected per species folder.
    """

    input_container: str = DEFAULT_INPUT_CONTAINER
    output_container: str = DEFAULT_OUTPUT_CONTAINER
    source: str = DEFAULT_PROVENANCE
    max_folders: int = 1000
    max_files_per_folder: int = 100

    @classmethod
    def from_env(cls) -> ImportConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range, a required
                string value is empty, or a numeric variable cannot be
                parsed (e.g. ``RANGE_MAP_MAX_FOLDERS=abc``).
        """
        config = cls(
            input_container=os.getenv("RANGE_MAP_INPUT_CONTAINER", DEFAULT_INPUT_CONTAINER),
            output_container=os.getenv("RANGE_MAP_OUTPUT_CONTAINER", DEFAULT_OUTPUT_CONTAINER),
            source=os.getenv("RANGE_MAP_SOURCE", DEFAULT_PROVENANCE),
            max_folders=_int_env("RANGE_MAP_MAX_FOLDERS", 1000),
            max_files_per_folder=_int_env("RANGE_MAP_MAX_FILES_PER_FOLDER", 100),
        )
        _validate(config)
        return config


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigValidationError(key, raw, "must be an integer") from None


def _validate(config: ImportConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.input_container:
        raise ConfigValidationError(
            "RANGE_MAP_INPUT_CONTAINER",
            config.input_container,
            "must not be empty",
        )

    if not config.output_container:
        raise ConfigValidationError(
            "RANGE_MAP_OUTPUT_CONTAINER",
            config.output_container,
            "must not be empty",
        )

    if not config.source.strip():
        raise ConfigValidationError(
            "RANGE_MAP_SOURCE",
            config.source,
            "must not be empty",
        )

    if config.max_folders <= 0:
        raise ConfigValidationError(
            "RANGE_MAP_MAX_FOLDERS",
            config.max_folders,
            "must be > 0",
        )

    if config.max_files_per_folder <= 0:
        raise ConfigValidationError(
            "RANGE_MAP_MAX_FILES_PER_FOLDER",
            config.max_files_per_folder,
            "must be > 0",
        )
