# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/gather/session.py

from __future__ import annotations

import logging
import os
import shlex
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import paramiko

from bootgather.errors import (
    GatherError,
    RemoteConnectFailed,
    RemoteExecFailed,
    RemoteTransferFailed,
)

log = logging.getLogger("bootgather")

REMOTE_USER = "core"
GATHER_SCRIPT = "/usr/local/bin/installer-gather.sh"
REMOTE_BUNDLE_PATH = "/home/core/log-bundle.tar.gz"
BUNDLE_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def bundle_path(directory: str | Path, when: datetime) -> Path:
    return Path(directory) / f"log-bundle-{when.strftime(BUNDLE_TIMESTAMP_FORMAT)}.tar.gz"


def gather_command(masters: Sequence[str]) -> str:
    return " ".join([GATHER_SCRIPT, *(shlex.quote(m) for m in masters)])


class RemoteGatherSession:
    """
    Connect to the bootstrap host, run the gather script and pull the
    resulting log bundle into *directory*.

    Each step depends on the previous one; the first failure aborts the
    session and the SSH connection is always closed.
    """

    def __init__(
        self,
        bootstrap: str,
        port: int,
        masters: Sequence[str],
        directory: str | Path,
        *,
        key_paths: Sequence[str | Path] = (),
        connect_timeout: Optional[float] = None,
        command_timeout: Optional[float] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if not bootstrap:
            raise GatherError("bootstrap host address is empty, refusing to connect")

        self.bootstrap = bootstrap
        self.port = port
        self.masters: List[str] = list(masters)
        self.directory = Path(directory)
        self.key_paths = [Path(p) for p in key_paths]
        self.connect_timeout = connect_timeout
        self.command_timeout = command_timeout
        self._clock = clock

    @property
    def target(self) -> str:
        return f"{self.bootstrap}:{self.port}"

    def run(self) -> Path:
        log.info("Pulling debug logs from the bootstrap machine")
        client = self._connect()
        try:
            self._run_gather(client)
            path = self._pull_bundle(client)
        finally:
            client.close()

        log.info("Bootstrap gather logs captured here %r", str(path))
        return path

    # ------------------ connection ------------------

    def _load_key(self) -> Optional[paramiko.PKey]:
        """
        Return the first key in key_paths that paramiko can load.
        """
        for path in self.key_paths:
            for key_cls in (
                paramiko.Ed25519Key,
                paramiko.RSAKey,
                paramiko.ECDSAKey,
            ):
                try:
                    return key_cls.from_private_key_file(str(path))
                except paramiko.SSHException:
                    continue
                except OSError as exc:
                    log.warning("Skipping SSH key %s: %s", path, exc)
                    break
            else:
                log.warning("Skipping SSH key %s: unsupported or encrypted key", path)
        return None

    def _connect(self) -> paramiko.SSHClient:
        pkey = None
        if self.key_paths:
            pkey = self._load_key()
            if pkey is None:
                raise RemoteConnectFailed(
                    "failed to create SSH client: none of the provided SSH keys could be loaded"
                )

        log.debug("Connecting to %s as %s", self.target, REMOTE_USER)
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            client.connect(
                hostname=self.bootstrap,
                port=self.port,
                username=REMOTE_USER,
                pkey=pkey,
                timeout=self.connect_timeout,
                # without explicit keys fall back to the agent and ~/.ssh
                allow_agent=pkey is None,
                look_for_keys=pkey is None,
            )
        except (paramiko.SSHException, OSError) as exc:
            client.close()
            raise RemoteConnectFailed(f"failed to create SSH client: {exc}") from exc

        return client

    # ------------------ steps ------------------

    def _exec(self, client: paramiko.SSHClient, cmd: str) -> Tuple[int, str, str]:
        _stdin, stdout, stderr = client.exec_command(cmd, timeout=self.command_timeout)
        out = stdout.read().decode("utf-8", errors="replace")
        err = stderr.read().decode("utf-8", errors="replace")
        rc = stdout.channel.recv_exit_status()
        return rc, out, err

    def _run_gather(self, client: paramiko.SSHClient) -> None:
        cmd = gather_command(self.masters)
        log.debug("Running %s on %s", cmd, self.target)
        try:
            rc, out, err = self._exec(client, cmd)
        except (paramiko.SSHException, OSError) as exc:
            raise RemoteExecFailed(f"failed to run remote command: {exc}") from exc

        if out:
            log.debug(out.rstrip())
        if rc != 0:
            raise RemoteExecFailed(
                f"failed to run remote command: {cmd!r} exited with status {rc}: {err.strip()}"
            )

    def _pull_bundle(self, client: paramiko.SSHClient) -> Path:
        path = bundle_path(self.directory, self._clock())
        if path.exists():
            # same-second rerun; the earlier bundle is left untouched
            raise RemoteTransferFailed(
                f"failed to pull log file from remote: {path} already exists"
            )

        partial = path.with_name(path.name + ".part")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            sftp = client.open_sftp()
            try:
                sftp.get(REMOTE_BUNDLE_PATH, str(partial))
            finally:
                sftp.close()
            # never replaces an existing bundle; raises FileExistsError
            os.link(partial, path)
            partial.unlink()
        except (paramiko.SSHException, OSError) as exc:
            partial.unlink(missing_ok=True)
            raise RemoteTransferFailed(f"failed to pull log file from remote: {exc}") from exc

        return path
