# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/providers/aws.py

from __future__ import annotations

from typing import List

from bootgather.state.terraform import TerraformState
from .base import StateLookupStrategy


class AwsStrategy(StateLookupStrategy):
    """
    Bootstrap is reached on its public IP when it has one (private
    subnets leave it empty), masters on their private IPs.
    """

    def bootstrap_address(self, state: TerraformState) -> str:
        for attr in ("public_ip", "private_ip"):
            ip = self._single(state, "module.bootstrap", "aws_instance", "bootstrap", attr)
            if ip:
                return ip
        raise self._bootstrap_failed("module.bootstrap.aws_instance.bootstrap has no address")

    def control_plane_addresses(self, state: TerraformState) -> List[str]:
        return self._all(state, "module.masters", "aws_instance", "master", "private_ip")
