# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/errors.py
from __future__ import annotations


class GatherError(RuntimeError):
    """Base class for bootstrap gather failures."""


class StateUnavailable(GatherError):
    """Raised when no infrastructure state has been persisted yet."""


class StateReadError(GatherError):
    """Raised when the state file exists but cannot be parsed."""


class InstallConfigError(GatherError):
    """Raised when the install config is missing or invalid."""


class UnsupportedPlatform(GatherError):
    """Raised when no address strategy exists for a platform."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(
            "Cannot fetch the bootstrap and control plane host addresses "
            f"from state file for {platform} platform"
        )


class BootstrapExtractionFailed(GatherError):
    """Raised when a strategy cannot find the bootstrap address."""


class ControlPlaneExtractionFailed(GatherError):
    """Raised when a strategy cannot list control plane addresses."""


class MissingManualAddresses(GatherError):
    def __init__(self):
        super().__init__(
            "bootstrap host address and at least one control plane host "
            "address must be provided"
        )


class RemoteGatherFailed(GatherError):
    """Base class for failures of the remote gather steps."""


class RemoteConnectFailed(RemoteGatherFailed):
    pass


class RemoteExecFailed(RemoteGatherFailed):
    pass


class RemoteTransferFailed(RemoteGatherFailed):
    pass
