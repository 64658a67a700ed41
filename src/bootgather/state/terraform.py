# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/state/terraform.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bootgather.errors import StateReadError, StateUnavailable

log = logging.getLogger("bootgather")

STATE_FILE_NAME = "terraform.tfstate"


class ResourceInstance(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    index_key: Optional[Any] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    module: Optional[str] = None     # e.g. "module.bootstrap"; None for the root module
    mode: str = "managed"
    type: str
    name: str
    instances: List[ResourceInstance] = Field(default_factory=list)


class TerraformState(BaseModel):
    """
    Read-only view of a Terraform (format 4) state file.
    Only the parts needed to locate hosts are modelled.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    version: int = 4
    resources: List[Resource] = Field(default_factory=list)

    def lookup(self, module: Optional[str], rtype: str, name: str) -> Optional[Resource]:
        """
        Return the managed resource at module/type/name, or None.
        """
        for res in self.resources:
            if (
                res.mode == "managed"
                and res.module == module
                and res.type == rtype
                and res.name == name
            ):
                return res
        return None


def state_path(directory: str | Path) -> Path:
    return Path(directory) / STATE_FILE_NAME


def read_state(path: str | Path) -> TerraformState:
    """
    Load the state file at *path*.

    A missing file raises StateUnavailable, which callers treat as
    "nothing provisioned yet" rather than a failure.
    """
    path = Path(path)
    if not path.is_file():
        raise StateUnavailable(f"no state file at {path}")

    log.debug("Reading infrastructure state from %s", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return TerraformState.model_validate(data)
    except (OSError, ValueError, ValidationError) as exc:
        raise StateReadError(f"failed to read state from {str(path)!r}: {exc}") from exc
