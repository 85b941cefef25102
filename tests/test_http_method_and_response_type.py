import asyncio
import concurrent.futures
from collections.abc import Awaitable, Callable
from typing import Any, Optional

import pytest

from rpcmap.contract.model import RouteTemplate
from rpcmap.domain.errors import InvalidContractError
from rpcmap.mapping.response import resolve_response_type
from rpcmap.mapping.verbs import resolve_http_method


class User:
    pass


def test_http_method_defaults_to_get():
    assert resolve_http_method(RouteTemplate(paths=("/x",))) == "GET"
    assert resolve_http_method(None) == "GET"


def test_http_method_takes_first_declared():
    assert resolve_http_method(RouteTemplate(methods=("post", "PUT"))) == "POST"


def test_route_template_rejects_unknown_verb():
    with pytest.raises(InvalidContractError):
        RouteTemplate(paths=("/x",), methods=("FETCH",))


@pytest.mark.parametrize(
    "declared",
    [
        asyncio.Future[User],
        concurrent.futures.Future[User],
        Awaitable[User],
        Callable[[], User],
    ],
)
def test_wrappers_unwrap_one_level(declared):
    assert resolve_response_type(declared) is User


def test_nested_wrappers_are_not_unwrapped_recursively():
    declared = concurrent.futures.Future[concurrent.futures.Future[User]]
    assert resolve_response_type(declared) == concurrent.futures.Future[User]


def test_callable_with_arguments_is_not_a_wrapper():
    declared = Callable[[int], User]
    assert resolve_response_type(declared) == declared


def test_bare_wrapper_resolves_to_any():
    assert resolve_response_type(concurrent.futures.Future) is Any


@pytest.mark.parametrize("declared", [User, dict[str, int], list[User], Optional[User], Any])
def test_plain_types_pass_through_and_resolution_is_idempotent(declared):
    once = resolve_response_type(declared)
    assert once == declared
    assert resolve_response_type(once) == once
