"""
Configuration loader (``inventory_config.loader``).

Loads a YAML file and parses it into a ``DiagnosticsConfig``.  Unknown keys
and out-of-range values are rejected rather than ignored.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Invalid or unknown keys  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

import yaml

from inventory_config.schema import DiagnosticsConfig
from inventory_kernel.exceptions import ConfigurationError

_TUPLE_FIELDS = (
    "stock_location_types",
    "vehicle_unit_statuses",
    "known_unit_statuses",
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("<root>", f"expected a mapping, got {type(data).__name__}")
    return data


def _string_tuple(name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigurationError(name, "expected a list of strings")
    if not value:
        raise ConfigurationError(name, "must not be empty")
    return tuple(str(v) for v in value)


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(name, f"expected a positive integer, got {value!r}")
    return value


def parse_diagnostics_config(data: dict[str, Any]) -> DiagnosticsConfig:
    """
    Parse a ``DiagnosticsConfig`` from a dict.

    Missing keys take the dataclass defaults.  A top-level ``diagnostics``
    key, if present, is unwrapped first.

    Raises:
        ConfigurationError: on unknown keys or invalid values.
    """
    if "diagnostics" in data and isinstance(data["diagnostics"], dict):
        data = data["diagnostics"]

    known = {f.name for f in fields(DiagnosticsConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(unknown[0], "unknown configuration key")

    kwargs: dict[str, Any] = {}
    for name, value in data.items():
        if name in _TUPLE_FIELDS:
            kwargs[name] = _string_tuple(name, value)
        elif name in ("max_workers", "location_workers"):
            kwargs[name] = _positive_int(name, value)
        elif name in ("concurrent", "flag_unrecognized_statuses"):
            if not isinstance(value, bool):
                raise ConfigurationError(name, f"expected true/false, got {value!r}")
            kwargs[name] = value
        elif name == "timeout_seconds":
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0
            ):
                raise ConfigurationError(name, f"expected a positive number, got {value!r}")
            kwargs[name] = float(value) if value is not None else None
        else:
            if not isinstance(value, str) or not value:
                raise ConfigurationError(name, "expected a non-empty string")
            kwargs[name] = value

    return DiagnosticsConfig(**kwargs)


def load_diagnostics_config(path: Path) -> DiagnosticsConfig:
    """Load and parse a diagnostics config file."""
    return parse_diagnostics_config(load_yaml_file(path))


def compute_checksum(config: DiagnosticsConfig) -> str:
    """Deterministic SHA-256 of the effective configuration."""
    canonical = json.dumps(asdict(config), sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
