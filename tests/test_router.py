"""Tests for dcat.routing.router — grouped registration and URL building."""

from pathlib import Path

import pytest

from dcat.errors import ConfigurationError, RouteNotFound
from dcat.routing.route import GroupAttributes
from dcat.routing.router import Router, parse_path


def _handler() -> str:
    return "ok"


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_path("/users/{id:int}")
        assert segments[1].param_type == "int"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "/share/<slug>" in str(exc_info.value)


class TestGroupAttributes:
    def test_from_mapping(self) -> None:
        attrs = GroupAttributes.from_mapping(
            {"prefix": "/admin/", "as": "dcat.admin.", "middleware": "admin.app:admin"}
        )
        assert attrs.prefix == "admin"
        assert attrs.name_prefix == "dcat.admin."
        assert attrs.middleware == ("admin.app:admin",)
        assert attrs.domain is None

    def test_middleware_sequence(self) -> None:
        attrs = GroupAttributes.from_mapping({"middleware": ["a", "b"]})
        assert attrs.middleware == ("a", "b")

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="namespace"):
            GroupAttributes.from_mapping({"namespace": "App"})

    def test_non_string_domain_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="domain"):
            GroupAttributes.from_mapping({"domain": 42})


class TestRouterAdd:
    def test_defaults_to_get(self) -> None:
        router = Router()
        route = router.add("/users", _handler)
        assert route.methods == frozenset({"GET"})
        assert route.path == "/users"

    def test_methods_uppercased(self) -> None:
        route = Router().add("/users", _handler, methods=["post", "put"])
        assert route.methods == frozenset({"POST", "PUT"})

    def test_decorator(self) -> None:
        router = Router()

        @router.route("/home", name="home")
        def home() -> str:
            return "home"

        assert router.get("home").handler is home

    def test_routes_in_registration_order(self) -> None:
        router = Router()
        router.add("/a", _handler)
        router.add("/b", _handler)
        assert [r.path for r in router.routes] == ["/a", "/b"]

    def test_add_after_compile_raises(self) -> None:
        router = Router()
        router.compile()
        with pytest.raises(RuntimeError, match="after compilation"):
            router.add("/late", _handler)

    def test_malformed_path_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Router().add("/users/<id>", _handler)


class TestRouterGroup:
    def test_group_applies_attributes(self) -> None:
        router = Router()

        def source(r: Router) -> None:
            r.add("/users", _handler, name="users.index")

        router.group(
            {
                "prefix": "admin",
                "as": "dcat.admin.",
                "middleware": "admin.app:admin",
                "domain": "admin.example.com",
            },
            source,
        )

        route = router.routes[0]
        assert route.path == "/admin/users"
        assert route.name == "dcat.admin.users.index"
        assert route.middleware == ("admin.app:admin",)
        assert route.domain == "admin.example.com"

    def test_nested_groups_accumulate(self) -> None:
        router = Router()

        def inner(r: Router) -> None:
            r.add("/action", _handler, methods=["POST"], name="action")

        def outer(r: Router) -> None:
            r.group({"prefix": "dcat-api", "as": "dcat-api.", "middleware": "throttle"}, inner)

        router.group({"as": "dcat.tenant.", "middleware": "admin.app:tenant"}, outer)

        route = router.get("dcat.tenant.dcat-api.action")
        assert route.path == "/dcat-api/action"
        assert route.middleware == ("admin.app:tenant", "throttle")

    def test_inner_domain_wins(self) -> None:
        router = Router()

        def inner(r: Router) -> None:
            r.add("/x", _handler, name="x")

        def outer(r: Router) -> None:
            r.group({"domain": "inner.example.com"}, inner)

        router.group({"domain": "outer.example.com"}, outer)
        assert router.get("x").domain == "inner.example.com"

    def test_group_popped_after_source(self) -> None:
        router = Router()
        router.group({"as": "grp."}, lambda r: r.add("/in", _handler, name="in"))
        router.add("/out", _handler, name="out")

        assert router.has("grp.in")
        assert router.has("out")
        assert router.get("out").middleware == ()

    def test_group_popped_when_source_raises(self) -> None:
        router = Router()

        def broken(r: Router) -> None:
            r.add("/in", _handler)
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            router.group({"prefix": "grp"}, broken)

        assert router.add("/out", _handler).path == "/out"

    def test_route_file(self, tmp_path: Path) -> None:
        routes_file = tmp_path / "routes.py"
        routes_file.write_text(
            "def dashboard():\n"
            "    return 'dashboard'\n"
            "\n"
            "router.add('/dashboard', dashboard, name='dashboard')\n"
        )
        router = Router()
        router.group({"as": "dcat.admin."}, routes_file)

        route = router.get("dcat.admin.dashboard")
        assert route.path == "/dashboard"
        assert route.handler() == "dashboard"

    def test_route_file_as_string(self, tmp_path: Path) -> None:
        routes_file = tmp_path / "routes.py"
        routes_file.write_text("router.add('/s', lambda: 's', name='s')\n")
        router = Router()
        router.load(str(routes_file))
        assert router.has("s")


class TestUrlFor:
    def test_absolute(self) -> None:
        router = Router(base_url="https://host.example/")
        router.add("/users", _handler, name="users")
        assert router.url_for("users") == "https://host.example/users"

    def test_relative(self) -> None:
        router = Router()
        router.add("/users", _handler, name="users")
        assert router.url_for("users", absolute=False) == "/users"

    def test_path_params(self) -> None:
        router = Router()
        router.add("/users/{id:int}/posts/{slug}", _handler, name="post")
        url = router.url_for("post", {"id": 7, "slug": "hello"}, absolute=False)
        assert url == "/users/7/posts/hello"

    def test_extra_params_become_query(self) -> None:
        router = Router()
        router.add("/users", _handler, name="users")
        assert router.url_for("users", {"page": 2}, absolute=False) == "/users?page=2"

    def test_domain_used_for_absolute(self) -> None:
        router = Router(base_url="https://host.example")
        router.group({"domain": "tenant.example.com"}, lambda r: r.add("/", _handler, name="home"))
        assert router.url_for("home") == "https://tenant.example.com/"

    def test_unknown_name(self) -> None:
        with pytest.raises(RouteNotFound):
            Router().url_for("missing")

    def test_missing_param(self) -> None:
        router = Router()
        router.add("/users/{id}", _handler, name="user")
        with pytest.raises(ConfigurationError, match="Missing parameter 'id'"):
            router.url_for("user")

    def test_param_type_mismatch(self) -> None:
        router = Router()
        router.add("/users/{id:int}", _handler, name="user")
        with pytest.raises(ConfigurationError, match="does not match"):
            router.url_for("user", {"id": "abc"})

    def test_latest_registration_wins(self) -> None:
        router = Router()
        router.add("/old", _handler, name="page")
        router.add("/new", _handler, name="page")
        assert router.url_for("page", absolute=False) == "/new"
