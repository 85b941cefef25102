import pytest

from rpcmap.contract.model import RouteTemplate
from rpcmap.domain.errors import UnboundPathVariablesError, UnmappedMethodError
from rpcmap.mapping.routes import (
    find_unbound_path_variables,
    resolve_path_template,
    template_variables,
    validate_path_variables,
)


def test_type_and_method_routes_are_joined_as_segments():
    path = resolve_path_template(
        RouteTemplate(paths=("/users",)),
        RouteTemplate(paths=("/{id}",)),
        method_name="UserApi.get_user",
    )
    assert path == "/users/{id}"


def test_missing_type_route_contributes_nothing():
    assert resolve_path_template(None, RouteTemplate(paths=("search",)), method_name="m") == "/search"


def test_slashes_are_normalized():
    path = resolve_path_template(
        RouteTemplate(paths=("api/v1/",)),
        RouteTemplate(paths=("//items//{sku}/",)),
        method_name="m",
    )
    assert path == "/api/v1/items/{sku}"


def test_empty_routes_resolve_to_root():
    assert resolve_path_template(RouteTemplate(), RouteTemplate(), method_name="m") == "/"


def test_only_first_declared_path_is_used():
    path = resolve_path_template(
        RouteTemplate(paths=("/a", "/b")),
        RouteTemplate(paths=("/x", "/y")),
        method_name="m",
    )
    assert path == "/a/x"


def test_missing_method_route_is_unmapped():
    with pytest.raises(UnmappedMethodError) as exc:
        resolve_path_template(RouteTemplate(paths=("/users",)), None, method_name="UserApi.list")
    assert exc.value.method == "UserApi.list"
    assert "not mapped" in str(exc.value)


def test_template_variables_in_order_without_duplicates():
    assert template_variables("/a/{x}/b/{y}/{x}") == ["x", "y"]


def test_template_variables_accept_extended_name_characters():
    assert template_variables("/files/{file.name}/{a-b_c~d}") == ["file.name", "a-b_c~d"]


def test_empty_braces_are_not_a_variable():
    assert template_variables("/a/{}/b") == []


def test_find_unbound_reports_every_missing_name():
    missing = find_unbound_path_variables("/{a}/{b}/{c}", {"b": "1"})
    assert missing == ["a", "c"]


def test_variable_bound_to_none_is_covered():
    assert find_unbound_path_variables("/items/{sku}", {"sku": None}) == []


def test_validate_raises_with_full_list():
    with pytest.raises(UnboundPathVariablesError) as exc:
        validate_path_variables("/orgs/{org}/repos/{repo}", {}, method_name="RepoApi.get")
    assert exc.value.missing == ("org", "repo")
    assert exc.value.method == "RepoApi.get"


def test_validate_passes_when_all_bound():
    validate_path_variables("/orgs/{org}", {"org": "acme", "extra": "ignored"}, method_name="m")


def test_slashes_inside_placeholders_are_kept():
    path = resolve_path_template(None, RouteTemplate(paths=("//x//{a//b}/",)), method_name="m")
    assert path == "/x/{a//b}"
    assert template_variables(path) == ["a//b"]


def test_bare_strings_are_a_single_path_and_verb():
    route = RouteTemplate(paths="/users", methods="post")
    assert route.paths == ("/users",)
    assert route.methods == ("POST",)
    assert resolve_path_template(None, route, method_name="m") == "/users"
