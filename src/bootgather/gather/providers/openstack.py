# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/providers/openstack.py

from __future__ import annotations

from typing import List

from bootgather.state.terraform import TerraformState
from .base import StateLookupStrategy


class OpenStackStrategy(StateLookupStrategy):
    """
    Prefer the bootstrap floating IP; fall back to the instance's
    access address when no floating IP was allocated.
    """

    def bootstrap_address(self, state: TerraformState) -> str:
        ip = self._single(
            state, "module.bootstrap", "openstack_networking_floatingip_v2", "bootstrap_fip", "address"
        ) or self._single(
            state, "module.bootstrap", "openstack_compute_instance_v2", "bootstrap", "access_ip_v4"
        )
        if not ip:
            raise self._bootstrap_failed("no floating IP or instance address for module.bootstrap")
        return ip

    def control_plane_addresses(self, state: TerraformState) -> List[str]:
        return self._all(
            state, "module.masters", "openstack_compute_instance_v2", "master_conf", "access_ip_v4"
        )
