from __future__ import annotations

import re
from typing import List, Mapping, Optional

from rpcmap.contract.model import RouteTemplate
from rpcmap.domain.errors import UnboundPathVariablesError, UnmappedMethodError
from rpcmap.mapping.names import first_or_default

PATH_VARIABLE = re.compile(r"\{([-a-zA-Z0-9@:%_+.~#?&/=]+)\}")

# a "/" followed by "...}" before any "{" sits inside a placeholder
_SEGMENT_SLASH = re.compile(r"/(?![^{}]*\})")


def _segments(fragment: str) -> list[str]:
    return [seg for seg in _SEGMENT_SLASH.split((fragment or "").strip()) if seg]


def resolve_path_template(
    type_route: Optional[RouteTemplate],
    method_route: Optional[RouteTemplate],
    *,
    method_name: str,
) -> str:
    """
    Merge the type-level and method-level routes into one path template.

      /users + /{id}  -> /users/{id}
      None   + search -> /search
    """
    if method_route is None:
        raise UnmappedMethodError(method_name)

    type_fragment = first_or_default(type_route.paths, "") if type_route is not None else ""
    method_fragment = first_or_default(method_route.paths, "")

    segments = _segments(type_fragment) + _segments(method_fragment)
    return "/" + "/".join(segments)


def template_variables(template: str) -> list[str]:
    """Placeholder names in template order, each reported once."""
    out: list[str] = []
    for m in PATH_VARIABLE.finditer(template):
        if m.group(1) not in out:
            out.append(m.group(1))
    return out


def find_unbound_path_variables(template: str, path_variables: Mapping[str, object]) -> List[str]:
    # a variable bound to None is still covered
    return [name for name in template_variables(template) if name not in path_variables]


def validate_path_variables(
    template: str,
    path_variables: Mapping[str, object],
    *,
    method_name: str,
) -> None:
    missing = find_unbound_path_variables(template, path_variables)
    if missing:
        raise UnboundPathVariablesError(method_name, missing)
