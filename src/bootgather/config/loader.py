# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/config/loader.py

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from bootgather.errors import InstallConfigError
from .models import InstallConfig

log = logging.getLogger("bootgather")

INSTALL_CONFIG_FILE_NAME = "install-config.yaml"


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text(encoding="utf-8")
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def load_install_config(directory: str | Path) -> InstallConfig:
    """
    Load and validate install-config.yaml from an installation directory.
    """
    path = Path(directory) / INSTALL_CONFIG_FILE_NAME
    if not path.is_file():
        raise InstallConfigError(f"failed to fetch install-config: {path} not found")

    log.debug("Loading install config from %s", path)
    try:
        data = _load_yaml(path)
        return InstallConfig.model_validate(data)
    except (OSError, ValueError, yaml.YAMLError, ValidationError) as exc:
        raise InstallConfigError(f"failed to fetch install-config from {path}: {exc}") from exc
