"""Tests for dcat.config — RegistryConfig frozen dataclass."""

from pathlib import Path

import pytest

from dcat.config import RegistryConfig
from dcat.errors import ConfigurationError


class TestRegistryConfig:
    def test_defaults(self) -> None:
        cfg = RegistryConfig()

        assert cfg.default_name == "admin"
        assert cfg.namespace == "dcat"
        assert cfg.api_namespace == "dcat-api"
        assert cfg.apps_key == "admin.multi_app"
        assert cfg.active_slot == "admin"
        assert cfg.middleware_alias == "admin.app"

    def test_override(self) -> None:
        cfg = RegistryConfig(default_name="panel", base_path="/srv")

        assert cfg.default_name == "panel"
        assert cfg.base_path == "/srv"

    def test_frozen(self) -> None:
        cfg = RegistryConfig()

        with pytest.raises(AttributeError):
            cfg.namespace = "other"  # type: ignore[misc]

    def test_routes_path(self) -> None:
        cfg = RegistryConfig(base_path=Path("/srv/app"), routes_file="admin/routes.py")
        assert cfg.routes_path == Path("/srv/app/admin/routes.py")

    def test_default_routes_path(self) -> None:
        assert RegistryConfig().routes_path == Path("app/Admin/routes.py")

    def test_empty_default_name_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="default_name"):
            RegistryConfig(default_name="")

    def test_empty_namespace_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="namespace"):
            RegistryConfig(namespace="")
