from __future__ import annotations

import json
import logging
import types
from pathlib import Path

import paramiko
import pytest

from bootgather.gather import session as session_mod


# ----------------- Fakes for Paramiko -----------------

class _FakeChannel:
    def __init__(self, rc=0): self._rc = rc
    def recv_exit_status(self): return self._rc

class _Buf:
    def __init__(self, s=""): self._s = s
    def read(self): return self._s.encode()

class FakeSFTP:
    def __init__(self, log, payload=b"bundle", error=None, on_get=None):
        self.log = log
        self.payload = payload
        self.error = error
        self.on_get = on_get
    def get(self, remote, local):
        self.log.append(("sftp_get", remote, local))
        if self.on_get is not None:
            self.on_get(local)
        Path(local).write_bytes(self.payload[: len(self.payload) // 2])
        if self.error is not None:
            raise self.error
        Path(local).write_bytes(self.payload)
    def close(self): self.log.append(("sftp_close",))

class FakeSSHClient:
    """
    Records connect/exec/sftp calls; responses maps command -> (out, err, rc).
    """
    def __init__(self, log, responses=None, connect_error=None, sftp_error=None, payload=b"bundle", on_get=None):
        self.log = log
        self._responses = responses or {}
        self._connect_error = connect_error
        self._sftp = FakeSFTP(log, payload=payload, error=sftp_error, on_get=on_get)
    def set_missing_host_key_policy(self, policy): pass
    def connect(self, **kw):
        self.log.append(("connect", kw))
        if self._connect_error is not None:
            raise self._connect_error
    def exec_command(self, cmd, timeout=None):
        self.log.append(("exec", cmd, timeout))
        out, err, rc = self._responses.get(cmd, ("", "", 0))
        stdout = _Buf(out)
        stderr = _Buf(err)
        stdout.channel = _FakeChannel(rc)
        return types.SimpleNamespace(write=lambda *a, **k: None, flush=lambda: None), stdout, stderr
    def open_sftp(self):
        self.log.append(("open_sftp",))
        return self._sftp
    def close(self):
        self.log.append(("close",))


class _NoKey:
    @staticmethod
    def from_private_key_file(path):
        raise paramiko.SSHException(f"not a valid key file: {path}")

class _FakeRSAKey:
    """Loads any readable file that contains GOOD."""
    @staticmethod
    def from_private_key_file(path):
        if "GOOD" not in Path(path).read_text():
            raise paramiko.SSHException(f"not a valid RSA private key file: {path}")
        return f"PKEY:{Path(path).name}"


@pytest.fixture
def ssh_ops():
    return []


@pytest.fixture
def fake_ssh(monkeypatch, ssh_ops):
    """
    Patch paramiko inside the session module. Call the returned function
    with FakeSSHClient kwargs to configure the next client.
    """
    settings = {}

    def make_client():
        ssh_ops.append(("client",))
        return FakeSSHClient(ssh_ops, **settings)

    monkeypatch.setattr(session_mod.paramiko, "SSHClient", make_client)
    monkeypatch.setattr(session_mod.paramiko, "Ed25519Key", _NoKey)
    monkeypatch.setattr(session_mod.paramiko, "ECDSAKey", _NoKey)
    monkeypatch.setattr(session_mod.paramiko, "RSAKey", _FakeRSAKey)

    def configure(**kw):
        settings.clear()
        settings.update(kw)

    return configure


# ----------------- State builders -----------------

def resource(module, rtype, name, *attributes):
    return {
        "module": module,
        "mode": "managed",
        "type": rtype,
        "name": name,
        "instances": [
            {"index_key": i if len(attributes) > 1 else None, "attributes": a}
            for i, a in enumerate(attributes)
        ],
    }


def aws_resources(bootstrap="10.0.0.5", masters=("10.0.0.6", "10.0.0.7")):
    return [
        resource("module.bootstrap", "aws_instance", "bootstrap", {"public_ip": bootstrap, "private_ip": "10.1.0.5"}),
        resource("module.masters", "aws_instance", "master", *({"private_ip": m} for m in masters)),
    ]


def write_state(directory: Path, resources) -> Path:
    path = directory / "terraform.tfstate"
    path.write_text(json.dumps({"version": 4, "terraform_version": "1.5.7", "resources": list(resources)}))
    return path


def write_install_config(directory: Path, platform: str) -> Path:
    path = directory / "install-config.yaml"
    path.write_text(
        "apiVersion: v1\n"
        "baseDomain: example.test\n"
        "metadata:\n"
        "  name: demo\n"
        "platform:\n"
        f"  {platform}:\n"
        "    region: us-east-1\n"
    )
    return path


@pytest.fixture(autouse=True)
def _reset_bootgather_logger():
    # init_logging detaches the logger from root; undo that between tests
    yield
    logger = logging.getLogger("bootgather")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
