"""Shared test fixtures and utilities."""

import pytest

from entitystore.storage import DiskEntityStore
from tests.backends import BACKENDS, build_store


@pytest.fixture(params=BACKENDS)
def store(request, tmp_path):
    """Every backend, one at a time."""
    return build_store(request.param, tmp_path)


@pytest.fixture
def disk_store(tmp_path):
    """Disk store rooted in a temp directory."""
    return DiskEntityStore(tmp_path / "entities")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's real config and cache directories."""
    monkeypatch.delenv("ENTITYSTORE_URI", raising=False)
    monkeypatch.setattr(
        "entitystore.config.default_config_path",
        lambda: tmp_path / "no-config" / "config.yaml",
    )
    monkeypatch.setattr(
        "entitystore.config.default_store_root",
        lambda: tmp_path / "default-store",
    )
    monkeypatch.setattr(
        "entitystore.cli.default_store_root",
        lambda: tmp_path / "default-store",
    )
