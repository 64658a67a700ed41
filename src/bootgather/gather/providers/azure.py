# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/providers/azure.py

from __future__ import annotations

from typing import List

from bootgather.state.terraform import TerraformState
from .base import StateLookupStrategy

# the bootstrap VM sits behind a load balancer NAT rule on this port
AZURE_SSH_PORT = 2200


class AzureStrategy(StateLookupStrategy):
    def bootstrap_address(self, state: TerraformState) -> str:
        ip = self._single(
            state, "module.bootstrap", "azurerm_public_ip", "bootstrap_public_ip_v4", "ip_address"
        )
        if not ip:
            raise self._bootstrap_failed(
                "module.bootstrap.azurerm_public_ip.bootstrap_public_ip_v4 has no ip_address"
            )
        return ip

    def control_plane_addresses(self, state: TerraformState) -> List[str]:
        return self._all(
            state, "module.master", "azurerm_network_interface", "master", "private_ip_address"
        )
