# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/providers/base.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol

from bootgather.errors import BootstrapExtractionFailed, ControlPlaneExtractionFailed
from bootgather.state.terraform import Resource, TerraformState

log = logging.getLogger("bootgather")

DEFAULT_SSH_PORT = 22


@dataclass
class HostAddresses:
    bootstrap: str
    port: int = DEFAULT_SSH_PORT
    masters: List[str] = field(default_factory=list)


class AddressStrategy(Protocol):
    """
    Contract for reading host addresses out of one provider's state.
    Implementations must treat the state as read-only.
    """

    def bootstrap_address(self, state: TerraformState) -> str:
        """Raise BootstrapExtractionFailed if no address can be found."""
        ...

    def control_plane_addresses(self, state: TerraformState) -> List[str]:
        """Raise ControlPlaneExtractionFailed if the masters cannot be listed."""
        ...


def extract_host_addresses(
    strategy: AddressStrategy,
    state: TerraformState,
    *,
    port: int = DEFAULT_SSH_PORT,
) -> HostAddresses:
    """
    Run a strategy against *state*.

    A bootstrap failure propagates and masters are never queried. A
    control plane failure is logged and yields an empty master list.
    """
    bootstrap = strategy.bootstrap_address(state)

    try:
        masters = strategy.control_plane_addresses(state)
    except ControlPlaneExtractionFailed as exc:
        log.warning("%s", exc)
        masters = []

    return HostAddresses(bootstrap=bootstrap, port=port, masters=list(masters))


# ------------------ state lookup helpers ------------------

class StateLookupStrategy:
    """
    Shared helpers for strategies that read Terraform resource attributes.
    """

    def _resource(self, state: TerraformState, module: Optional[str], rtype: str, name: str) -> Optional[Resource]:
        return state.lookup(module, rtype, name)

    @staticmethod
    def _attr(attributes: dict, *path: Any) -> Optional[str]:
        """
        Walk nested dict/list attributes, e.g. _attr(a, "network_interface", 0, "addresses", 0).
        Empty values count as missing.
        """
        cur: Any = attributes
        for step in path:
            try:
                cur = cur[step]
            except (KeyError, IndexError, TypeError):
                return None
        if cur in (None, ""):
            return None
        return str(cur)

    def _single(self, state: TerraformState, module: Optional[str], rtype: str, name: str, *path: Any) -> Optional[str]:
        res = self._resource(state, module, rtype, name)
        if res is None or not res.instances:
            return None
        return self._attr(res.instances[0].attributes, *path)

    def _bootstrap_failed(self, detail: str) -> BootstrapExtractionFailed:
        return BootstrapExtractionFailed(f"failed to get bootstrap IP: {detail}")

    def _all(self, state: TerraformState, module: Optional[str], rtype: str, name: str, *path: Any) -> List[str]:
        res = self._resource(state, module, rtype, name)
        if res is None:
            raise ControlPlaneExtractionFailed(
                f"failed to get control plane IPs: resource {_address(module, rtype, name)} not found in state"
            )

        ips: List[str] = []
        for inst in res.instances:
            ip = self._attr(inst.attributes, *path)
            if ip is None:
                raise ControlPlaneExtractionFailed(
                    f"failed to get control plane IPs: {_address(module, rtype, name)}"
                    f"[{inst.index_key}] has no address"
                )
            ips.append(ip)
        return ips


def _address(module: Optional[str], rtype: str, name: str) -> str:
    return f"{module}.{rtype}.{name}" if module else f"{rtype}.{name}"
