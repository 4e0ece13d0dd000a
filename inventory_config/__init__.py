"""
inventory_config -- single public entrypoint for diagnostics configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains a
    ``DiagnosticsConfig``.  Resolution order: explicit path argument, then
    the ``INVENTORY_DIAGNOSTICS_CONFIG`` environment variable, then the
    packaged ``defaults.yaml``.

Audit relevance:
    Every call emits an ``INVENTORY_CONFIG_TRACE`` log entry with the
    source path and configuration checksum.
"""

from __future__ import annotations

import os
from pathlib import Path

from inventory_config.loader import (
    compute_checksum,
    load_diagnostics_config,
    parse_diagnostics_config,
)
from inventory_config.schema import DiagnosticsConfig
from inventory_kernel.logging_config import get_logger

_logger = get_logger("config")

CONFIG_ENV_VAR = "INVENTORY_DIAGNOSTICS_CONFIG"
_DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(path: Path | str | None = None) -> DiagnosticsConfig:
    """Resolve, load and validate the diagnostics configuration.

    Raises:
        FileNotFoundError: If the resolved file does not exist.
        ConfigurationError: If the file contains invalid settings.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or _DEFAULT_CONFIG_PATH
    source = Path(path)

    config = load_diagnostics_config(source)

    _logger.info(
        "INVENTORY_CONFIG_TRACE",
        extra={
            "trace_type": "INVENTORY_CONFIG_TRACE",
            "config_path": str(source),
            "checksum": compute_checksum(config),
            "concurrent": config.concurrent,
            "max_workers": config.max_workers,
        },
    )
    return config


__all__ = [
    "CONFIG_ENV_VAR",
    "DiagnosticsConfig",
    "compute_checksum",
    "get_active_config",
    "load_diagnostics_config",
    "parse_diagnostics_config",
]
