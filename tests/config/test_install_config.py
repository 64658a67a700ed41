from pathlib import Path
import textwrap

import pytest

from bootgather.config import Platform, load_install_config
from bootgather.errors import InstallConfigError

from conftest import write_install_config


def test_load_install_config_minimal_ok(tmp_path: Path):
    write_install_config(tmp_path, "azure")
    cfg = load_install_config(tmp_path)
    assert cfg.metadata.name == "demo"
    assert cfg.base_domain == "example.test"
    assert cfg.platform_name == Platform.AZURE.value


def test_unknown_platform_is_kept_as_string(tmp_path: Path):
    write_install_config(tmp_path, "ovirt")
    assert load_install_config(tmp_path).platform_name == "ovirt"


def test_env_vars_are_expanded(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("CLUSTER_NAME", "from-env")
    (tmp_path / "install-config.yaml").write_text(textwrap.dedent("""
        metadata:
          name: ${CLUSTER_NAME}
        platform:
          none: {}
    """))
    cfg = load_install_config(tmp_path)
    assert cfg.metadata.name == "from-env"
    assert cfg.platform_name == "none"


def test_missing_install_config(tmp_path: Path):
    with pytest.raises(InstallConfigError, match="failed to fetch install-config"):
        load_install_config(tmp_path)


def test_invalid_install_config(tmp_path: Path):
    (tmp_path / "install-config.yaml").write_text("platform: [unclosed")
    with pytest.raises(InstallConfigError):
        load_install_config(tmp_path)


def test_undecodable_install_config(tmp_path: Path):
    (tmp_path / "install-config.yaml").write_bytes(b"platform:\n  aws: {}\nname: \xff\n")

    with pytest.raises(InstallConfigError) as info:
        load_install_config(tmp_path)

    assert isinstance(info.value.__cause__, UnicodeDecodeError)
    assert str(info.value.__cause__) in str(info.value)

