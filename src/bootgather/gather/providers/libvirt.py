# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/providers/libvirt.py

from __future__ import annotations

from typing import List

from bootgather.state.terraform import TerraformState
from .base import StateLookupStrategy

_FIRST_ADDRESS = ("network_interface", 0, "addresses", 0)


class LibvirtStrategy(StateLookupStrategy):
    def bootstrap_address(self, state: TerraformState) -> str:
        ip = self._single(state, "module.bootstrap", "libvirt_domain", "bootstrap", *_FIRST_ADDRESS)
        if not ip:
            raise self._bootstrap_failed("module.bootstrap.libvirt_domain.bootstrap has no address")
        return ip

    def control_plane_addresses(self, state: TerraformState) -> List[str]:
        return self._all(state, "module.masters", "libvirt_domain", "master", *_FIRST_ADDRESS)
