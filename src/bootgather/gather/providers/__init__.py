# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/providers/__init__.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from bootgather.config.models import Platform
from .aws import AwsStrategy
from .azure import AZURE_SSH_PORT, AzureStrategy
from .base import DEFAULT_SSH_PORT, AddressStrategy, HostAddresses, extract_host_addresses
from .libvirt import LibvirtStrategy
from .openstack import OpenStackStrategy


@dataclass(frozen=True)
class ProviderEntry:
    strategy: AddressStrategy
    port: int = DEFAULT_SSH_PORT


def build_provider_registry() -> Dict[str, ProviderEntry]:
    """
    Platform name -> address strategy. Register new providers here.
    """
    return {
        Platform.AWS.value: ProviderEntry(AwsStrategy()),
        Platform.AZURE.value: ProviderEntry(AzureStrategy(), port=AZURE_SSH_PORT),
        Platform.LIBVIRT.value: ProviderEntry(LibvirtStrategy()),
        Platform.OPENSTACK.value: ProviderEntry(OpenStackStrategy()),
    }


PROVIDERS: Dict[str, ProviderEntry] = build_provider_registry()

__all__ = [
    "AZURE_SSH_PORT",
    "DEFAULT_SSH_PORT",
    "PROVIDERS",
    "AddressStrategy",
    "AwsStrategy",
    "AzureStrategy",
    "HostAddresses",
    "LibvirtStrategy",
    "OpenStackStrategy",
    "ProviderEntry",
    "build_provider_registry",
    "extract_host_addresses",
]
