# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/resolver.py

from __future__ import annotations

import logging
from typing import Mapping, Optional

from bootgather.config.models import GatherOptions
from bootgather.errors import BootstrapExtractionFailed, MissingManualAddresses, UnsupportedPlatform
from bootgather.gather.providers import (
    DEFAULT_SSH_PORT,
    PROVIDERS,
    HostAddresses,
    ProviderEntry,
    extract_host_addresses,
)
from bootgather.state.terraform import TerraformState

log = logging.getLogger("bootgather")


def resolve_from_state(
    platform: str,
    state: TerraformState,
    registry: Optional[Mapping[str, ProviderEntry]] = None,
) -> HostAddresses:
    """
    Pick the strategy registered for *platform* and extract host addresses.

    Raises UnsupportedPlatform when no strategy is registered, and
    BootstrapExtractionFailed when the strategy cannot find the bootstrap
    host. Only the former is meant to be recovered by manual addresses.
    """
    registry = PROVIDERS if registry is None else registry

    entry = registry.get(platform)
    if entry is None:
        raise UnsupportedPlatform(platform)

    log.debug("Resolving host addresses for %s platform (port %d)", platform, entry.port)
    try:
        return extract_host_addresses(entry.strategy, state, port=entry.port)
    except BootstrapExtractionFailed as exc:
        raise BootstrapExtractionFailed(
            f"failed to get bootstrap and control plane host addresses from state: {exc}"
        ) from exc


def resolve_manual(options: GatherOptions) -> HostAddresses:
    """
    Use the addresses the caller supplied. Both a bootstrap host and at
    least one control plane host are required.
    """
    if not options.bootstrap or not options.masters:
        raise MissingManualAddresses()

    return HostAddresses(
        bootstrap=options.bootstrap,
        port=DEFAULT_SSH_PORT,
        masters=list(options.masters),
    )
