# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/config/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):
    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"
    LIBVIRT = "libvirt"
    OPENSTACK = "openstack"
    VSPHERE = "vsphere"
    BAREMETAL = "baremetal"
    NONE = "none"


class Metadata(BaseModel):
    name: str = ""


class InstallConfig(BaseModel):
    """
    The slice of install-config.yaml needed to pick a gather strategy.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    metadata: Metadata = Field(default_factory=Metadata)
    base_domain: str = Field("", alias="baseDomain")
    platform: Dict[str, Any] = Field(default_factory=dict)

    @property
    def platform_name(self) -> str:
        # exactly one key is expected under `platform:`
        if not self.platform:
            return ""
        return next(iter(self.platform))


@dataclass
class GatherOptions:
    """
    Caller-supplied overrides for a bootstrap gather.
    """
    bootstrap: str = ""                                   # manual bootstrap host
    masters: List[str] = field(default_factory=list)      # manual control plane hosts
    key_paths: List[Path] = field(default_factory=list)   # empty -> agent/default keys
    connect_timeout: Optional[float] = None
    command_timeout: Optional[float] = None
