"""
Module hwscan.core.configuration.app_config
-------------------------------------------

This module defines the runtime configuration of HWSCAN and the helpers that
load it. Built-in defaults are merged with YAML files from the `HWSCAN_CONFIG`
environment variable and an explicit `--config` path.
"""

import logging
import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, PositiveFloat, StrictStr, ValidationError

from ..exceptions import ConfigurationError
from .base_config import BaseConfigModel

logger = logging.getLogger(__name__)

ENV_CONFIG = "HWSCAN_CONFIG"


class SourcePathsConfig(BaseConfigModel):
    """Roots of the kernel pseudo-filesystems the detectors read from."""

    proc_root: StrictStr = Field(default="/proc", description="Mount point of procfs")
    sys_root: StrictStr = Field(default="/sys", description="Mount point of sysfs")

    def to_dict(self):
        return super().to_dict()

    def to_json(self, indent: int | None = None):
        return super().to_json(indent=indent)


class ToolCommandsConfig(BaseConfigModel):
    """External inventory tools invoked by the detectors."""

    dmidecode: StrictStr = Field(default="dmidecode", description="Privileged DMI inventory tool")
    lspci: StrictStr = Field(default="lspci", description="PCI bus lister")
    nvidia_smi: StrictStr = Field(default="nvidia-smi", description="NVIDIA management command")
    timeout: PositiveFloat | None = Field(default=None, description="Subprocess timeout in seconds (None => wait)")

    def to_dict(self):
        return super().to_dict()

    def to_json(self, indent: int | None = None):
        return super().to_json(indent=indent)


class ExportConfig(BaseConfigModel):
    """JSON export settings."""

    enabled: bool = Field(default=True, description="Export the snapshot after scanning")
    mount_roots: list[StrictStr] = Field(default_factory=lambda: ["/media", "/mnt", "/run/media"], description="Where removable media is mounted")
    filename_prefix: StrictStr = Field(default="hwscan", description="Prefix of exported file names")

    def to_dict(self):
        return super().to_dict()

    def to_json(self, indent: int | None = None):
        return super().to_json(indent=indent)


class ServerConfig(BaseConfigModel):
    """Embedded HTTP server settings."""

    enabled: bool = Field(default=True, description="Serve the snapshot over HTTP")
    host: StrictStr = Field(default="0.0.0.0", description="Listen address")
    port: Annotated[int, Field(default=8080, ge=1, le=65535, description="Listen port")]
    web_dirs: list[StrictStr] = Field(default_factory=lambda: ["web", "/usr/share/hwscan/web"], description="Static web UI candidates")

    def to_dict(self):
        return super().to_dict()

    def to_json(self, indent: int | None = None):
        return super().to_json(indent=indent)


class LoggingConfig(BaseConfigModel):
    """Logging settings."""

    config_file: StrictStr | None = Field(default=None, description="Path to a logger_config.yaml override")
    log_dir: StrictStr = Field(default="logs", description="Directory for file handlers")

    def to_dict(self):
        return super().to_dict()

    def to_json(self, indent: int | None = None):
        return super().to_json(indent=indent)


class HwscanConfig(BaseConfigModel):
    """
    Top-level runtime configuration.
    """

    sources: SourcePathsConfig = Field(default_factory=SourcePathsConfig)
    commands: ToolCommandsConfig = Field(default_factory=ToolCommandsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_dict(self):
        return super().to_dict()

    def to_json(self, indent: int | None = None):
        return super().to_json(indent=indent)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base (recursive). base is not mutated."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return data


def load_config(override_path: str | Path | None = None) -> HwscanConfig:
    """
    Load the runtime configuration.

    Args:
        override_path (str | Path | None): Explicit YAML file, applied last.

    Returns:
        HwscanConfig: Validated configuration.

    Raises:
        ConfigurationError: If a file is missing, unreadable or invalid.
    """
    data: dict[str, Any] = {}

    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        if Path(env_path).exists():
            logger.debug(f"Loading configuration from {ENV_CONFIG}={env_path}")
            data = _deep_merge(data, _load_yaml(Path(env_path)))
        else:
            logger.warning(f"{ENV_CONFIG} points to a missing file: {env_path}")

    if override_path is not None:
        path = Path(override_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        logger.debug(f"Loading configuration from {path}")
        data = _deep_merge(data, _load_yaml(path))

    try:
        return HwscanConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
