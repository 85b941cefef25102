from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from rpcmap.domain.errors import InvalidContractError
from rpcmap.domain.models import HTTP_METHODS


class ParamRole(str, Enum):
    PATH_VARIABLE = "path variable"
    QUERY_PARAM = "request parameter"
    BODY = "request body"
    NONE = "none"


# Role markers, used as typing.Annotated metadata:
#   def get(self, user_id: Annotated[int, PathVariable("id")]) -> User: ...


@dataclass(frozen=True)
class PathVariable:
    name: str = ""
    role = ParamRole.PATH_VARIABLE


@dataclass(frozen=True)
class QueryParam:
    name: str = ""
    role = ParamRole.QUERY_PARAM


@dataclass(frozen=True)
class Body:
    role = ParamRole.BODY


@dataclass(frozen=True)
class RouteTemplate:
    """
    Route declared at one level (type or method).

    Only the first path and the first verb are used when several are declared.
    """

    paths: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()   # empty -> GET

    def __post_init__(self) -> None:
        # a bare string is one path / one verb, not a sequence of characters
        paths = (self.paths,) if isinstance(self.paths, str) else tuple(self.paths)
        raw_methods = (self.methods,) if isinstance(self.methods, str) else self.methods
        methods = tuple(str(m).strip().upper() for m in raw_methods)
        for m in methods:
            if m not in HTTP_METHODS:
                raise InvalidContractError(",".join(paths) or "/", f"Unknown HTTP method {m!r}")
        object.__setattr__(self, "paths", paths)
        object.__setattr__(self, "methods", methods)


@dataclass(frozen=True)
class ParameterDescriptor:
    index: int
    role: ParamRole = ParamRole.NONE
    declared_name: str = ""                 # "" -> fall back to discovered_name
    discovered_name: Optional[str] = None   # reflected parameter name, if any


@dataclass(frozen=True)
class MethodContract:
    """
    Immutable description of one invocable client method.

    Built once per method and read-only afterwards; per-call work only binds
    runtime values against it.
    """

    name: str                               # e.g. "UserApi.get_user"
    parameters: tuple[ParameterDescriptor, ...] = ()
    type_route: Optional[RouteTemplate] = None
    method_route: Optional[RouteTemplate] = None
    response_type: Any = Any
    response_body: bool = False

    def __post_init__(self) -> None:
        params = tuple(self.parameters)
        object.__setattr__(self, "parameters", params)

        for pos, p in enumerate(params):
            if p.index != pos:
                raise InvalidContractError(
                    self.name, f"Parameter at position {pos} declares index {p.index}"
                )

        bodies = [p.index for p in params if p.role is ParamRole.BODY]
        if len(bodies) > 1:
            raise InvalidContractError(
                self.name, f"Only one request body parameter is allowed, got positions {bodies}"
            )

        seen: set[str] = set()
        for p in params:
            if p.role is not ParamRole.PATH_VARIABLE:
                continue
            key = p.declared_name or p.discovered_name or ""
            if not key:
                continue  # reported at call time as an unresolvable name
            if key in seen:
                raise InvalidContractError(self.name, f"Path variable {key!r} is declared twice")
            seen.add(key)
