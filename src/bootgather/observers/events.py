# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
import uuid


@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events of one gather invocation
    directory: str    # installation directory

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(directory: str, run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "run_id": run_id or str(uuid.uuid4()),
        "directory": directory,
    }


@dataclass(frozen=True)
class GatherStarted(BaseEvent):
    state_present: bool


@dataclass(frozen=True)
class ManualFallback(BaseEvent):
    reason: str


@dataclass(frozen=True)
class AddressesResolved(BaseEvent):
    source: str       # "state" | "manual"
    platform: Optional[str]
    bootstrap: str
    port: int
    masters: List[str]


@dataclass(frozen=True)
class BundleCaptured(BaseEvent):
    path: str


@dataclass(frozen=True)
class GatherFailed(BaseEvent):
    error_type: str
    error: str
