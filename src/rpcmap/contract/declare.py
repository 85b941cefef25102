"""
Declarative client contracts.

    @mapping("/users")
    @response_body
    class UserApi:
        @mapping("/{id}")
        def get_user(self, user_id: Annotated[int, PathVariable("id")]) -> User: ...

Contracts are built once per (owner, method) by reflection and cached.
"""
from __future__ import annotations

import inspect
import logging
import typing
from functools import lru_cache
from typing import Any, Callable, Iterable, Optional, TypeVar, get_args, get_origin

from rpcmap.contract.model import (
    Body,
    MethodContract,
    ParameterDescriptor,
    PathVariable,
    QueryParam,
    RouteTemplate,
)
from rpcmap.domain.errors import ArgumentBindingError, InvalidContractError

log = logging.getLogger(__name__)

ROUTE_ATTR = "__rpcmap_route__"
RESPONSE_BODY_ATTR = "__rpcmap_response_body__"

_ROLE_MARKERS = (PathVariable, QueryParam, Body)
_VAR_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

T = TypeVar("T")


def mapping(*paths: str, methods: Iterable[str] = ()) -> Callable[[T], T]:
    """Attach a route to a client class (type level) or method (method level)."""
    declared = methods if isinstance(methods, str) else tuple(methods)
    route = RouteTemplate(paths=tuple(paths), methods=declared)

    def decorate(target: T) -> T:
        label = getattr(target, "__qualname__", repr(target))
        if len(route.paths) > 1:
            log.warning("%s declares paths %s; only %r is used", label, list(route.paths), route.paths[0])
        if len(route.methods) > 1:
            log.warning("%s declares methods %s; only %s is used", label, list(route.methods), route.methods[0])
        setattr(target, ROUTE_ATTR, route)
        return target

    return decorate


def response_body(target: T) -> T:
    """Mark a method (or every method of a class) as returning its result in the response body."""
    setattr(target, RESPONSE_BODY_ATTR, True)
    return target


def _lookup(owner: type, method_name: str) -> tuple[type, Any, Callable[..., Any], int]:
    """
    (declaring class, raw class attribute, plain function, leading params to skip)
    """
    declaring = next((c for c in owner.__mro__ if method_name in vars(c)), None)
    if declaring is None:
        raise InvalidContractError(f"{owner.__qualname__}.{method_name}", "No such method")

    raw = vars(declaring)[method_name]
    if isinstance(raw, staticmethod):
        func, skip = raw.__func__, 0
    elif isinstance(raw, classmethod):
        func, skip = raw.__func__, 1
    elif inspect.isfunction(raw):
        func, skip = raw, 1
    else:
        raise InvalidContractError(f"{owner.__qualname__}.{method_name}", "Not a method")

    return declaring, raw, func, skip


def _declared(raw: Any, func: Any, attr: str) -> Any:
    # @mapping may sit outside @staticmethod/@classmethod
    if hasattr(func, attr):
        return getattr(func, attr)
    return getattr(raw, attr, None)


def _role_marker(name: str, hint: Any, contract_name: str) -> Optional[Any]:
    if get_origin(hint) is not typing.Annotated:
        return None
    markers = [m for m in get_args(hint)[1:] if isinstance(m, _ROLE_MARKERS)]
    if len(markers) > 1:
        raise InvalidContractError(contract_name, f"Parameter {name!r} declares more than one role")
    return markers[0] if markers else None


@lru_cache(maxsize=None)
def contract_for(owner: type, method_name: str) -> MethodContract:
    declaring, raw, func, skip = _lookup(owner, method_name)
    contract_name = f"{owner.__qualname__}.{method_name}"

    try:
        hints = typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError) as exc:
        raise InvalidContractError(contract_name, f"Cannot evaluate annotations: {exc}") from exc

    params = list(inspect.signature(func).parameters.values())[skip:]
    descriptors: list[ParameterDescriptor] = []
    for index, param in enumerate(params):
        marker = _role_marker(param.name, hints.get(param.name), contract_name)
        if marker is None:
            descriptors.append(ParameterDescriptor(index=index, discovered_name=param.name))
            continue
        if param.kind in _VAR_KINDS:
            raise InvalidContractError(
                contract_name, f"Parameter {param.name!r} cannot carry a {marker.role.value} role"
            )
        descriptors.append(
            ParameterDescriptor(
                index=index,
                role=marker.role,
                declared_name=getattr(marker, "name", ""),
                discovered_name=param.name,
            )
        )

    contract = MethodContract(
        name=contract_name,
        parameters=tuple(descriptors),
        type_route=vars(declaring).get(ROUTE_ATTR),
        method_route=_declared(raw, func, ROUTE_ATTR),
        response_type=hints.get("return", Any),
        response_body=bool(
            _declared(raw, func, RESPONSE_BODY_ATTR) or getattr(declaring, RESPONSE_BODY_ATTR, False)
        ),
    )
    log.debug("built contract %s (%d parameters)", contract_name, len(descriptors))
    return contract


def declared_methods(owner: type) -> list[str]:
    """Public methods of `owner` that carry a method-level route, sorted by name."""
    out = []
    for name in dir(owner):
        if name.startswith("_"):
            continue
        try:
            _, raw, func, _ = _lookup(owner, name)
        except InvalidContractError:
            continue
        if _declared(raw, func, ROUTE_ATTR) is not None:
            out.append(name)
    return out


def bind_arguments(owner: type, method_name: str, args: tuple, kwargs: dict) -> tuple:
    """Normalize a call's positional/keyword arguments into parameter order, defaults applied."""
    _, _, func, skip = _lookup(owner, method_name)
    sig = inspect.signature(func)
    try:
        bound = sig.bind(*([None] * skip), *args, **kwargs)
    except TypeError as exc:
        raise ArgumentBindingError(f"{owner.__qualname__}.{method_name}", str(exc)) from exc
    bound.apply_defaults()
    return tuple(bound.arguments.values())[skip:]
