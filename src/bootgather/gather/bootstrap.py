# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/bootstrap.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping, Optional, Tuple

from bootgather.config.loader import load_install_config
from bootgather.config.models import GatherOptions
from bootgather.errors import GatherError, StateUnavailable, UnsupportedPlatform
from bootgather.gather.providers import HostAddresses, ProviderEntry
from bootgather.gather.resolver import resolve_from_state, resolve_manual
from bootgather.gather.session import RemoteGatherSession
from bootgather.observers.dispatcher import EventBus
from bootgather.observers.events import (
    AddressesResolved,
    BundleCaptured,
    GatherFailed,
    GatherStarted,
    ManualFallback,
    new_ctx,
)
from bootgather.state.terraform import read_state, state_path

log = logging.getLogger("bootgather")


class BootstrapGatherer:
    """
    Resolve the bootstrap and control plane hosts of a failed install and
    pull a log bundle from the bootstrap host.

    Addresses come from the infrastructure state when there is one and its
    platform has a strategy; otherwise the manual addresses in *options*
    are used.
    """

    def __init__(
        self,
        directory: str | Path,
        options: GatherOptions,
        *,
        bus: Optional[EventBus] = None,
        registry: Optional[Mapping[str, ProviderEntry]] = None,
        session_factory: Callable[..., RemoteGatherSession] = RemoteGatherSession,
        run_id: Optional[str] = None,
    ):
        self.directory = Path(directory)
        self.options = options
        self.bus = bus or EventBus()
        self.registry = registry
        self.session_factory = session_factory
        self._ctx = new_ctx(str(self.directory), run_id)

    def run(self) -> Path:
        try:
            source, platform, addrs = self._resolve()
            self.bus.emit(AddressesResolved(
                **self._ctx,
                source=source,
                platform=platform,
                bootstrap=addrs.bootstrap,
                port=addrs.port,
                masters=list(addrs.masters),
            ))

            session = self.session_factory(
                addrs.bootstrap,
                addrs.port,
                addrs.masters,
                self.directory,
                key_paths=self.options.key_paths,
                connect_timeout=self.options.connect_timeout,
                command_timeout=self.options.command_timeout,
            )
            path = session.run()
        except GatherError as exc:
            self.bus.emit(GatherFailed(**self._ctx, error_type=type(exc).__name__, error=str(exc)))
            raise

        self.bus.emit(BundleCaptured(**self._ctx, path=str(path)))
        return path

    def _resolve(self) -> Tuple[str, Optional[str], HostAddresses]:
        try:
            state = read_state(state_path(self.directory))
        except StateUnavailable as exc:
            self.bus.emit(GatherStarted(**self._ctx, state_present=False))
            log.debug("%s, using manually provided addresses", exc)
            return self._manual(str(exc), None)

        self.bus.emit(GatherStarted(**self._ctx, state_present=True))
        config = load_install_config(self.directory)
        platform = config.platform_name

        try:
            addrs = resolve_from_state(platform, state, self.registry)
        except UnsupportedPlatform as exc:
            log.error("%s", exc)
            return self._manual(str(exc), platform)
        # BootstrapExtractionFailed propagates; only UnsupportedPlatform falls back

        return "state", platform, addrs

    def _manual(self, reason: str, platform: Optional[str]) -> Tuple[str, Optional[str], HostAddresses]:
        self.bus.emit(ManualFallback(**self._ctx, reason=reason))
        return "manual", platform, resolve_manual(self.options)


def gather_bootstrap(
    directory: str | Path,
    options: GatherOptions,
    *,
    bus: Optional[EventBus] = None,
    run_id: Optional[str] = None,
) -> Path:
    return BootstrapGatherer(directory, options, bus=bus, run_id=run_id).run()
