from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Mapping, Optional, Sequence
from urllib.parse import quote, urlencode

import httpx

from rpcmap.contract.model import MethodContract
from rpcmap.domain.errors import MalformedTemplateError
from rpcmap.mapping.routes import PATH_VARIABLE


def render_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (dt.date, dt.datetime, dt.time)):
        return value.isoformat()
    return str(value)


class DefaultParameterResolver:
    """str() of the argument with a few wire-friendly special cases; None means absent."""

    def resolve(self, contract: MethodContract, args: Sequence[Any], index: int) -> Optional[str]:
        return render_value(args[index])


class HttpxUrlBuilder:
    """
    Template expansion on top of httpx.URL.

    Placeholder values are percent-encoded as a single segment, so "a/b"
    becomes "a%2Fb". The expanded path is appended to the base URL's path;
    query pairs keep their order, repeated names included.
    """

    def build(
        self,
        base_url: str,
        path_template: str,
        query_params: Sequence[tuple[str, str]],
        path_variables: Mapping[str, Optional[str]],
    ) -> httpx.URL:
        path = self._expand(path_template, path_variables)
        base = httpx.URL(base_url)
        # raw path keeps the base URL's own percent-escapes
        base_path = base.raw_path.split(b"?", 1)[0].decode("ascii").rstrip("/")
        full_path = base_path + path
        query = urlencode(list(query_params)).encode("ascii")
        return base.copy_with(path=full_path or "/", query=query or None)

    def _expand(self, template: str, path_variables: Mapping[str, Optional[str]]) -> str:
        out: list[str] = []
        pos = 0
        for m in PATH_VARIABLE.finditer(template):
            out.append(self._literal(template, template[pos:m.start()]))
            name = m.group(1)
            if name not in path_variables:
                raise MalformedTemplateError(template, f"no value for {{{name}}}")
            value = path_variables[name]
            out.append(self._segment(value))
            pos = m.end()
        out.append(self._literal(template, template[pos:]))
        return "".join(out)

    @staticmethod
    def _segment(value: Optional[str]) -> str:
        encoded = quote(value if value is not None else "", safe="")
        # "." and ".." would be collapsed as dot segments
        if encoded and set(encoded) == {"."}:
            encoded = encoded.replace(".", "%2E")
        return encoded

    @staticmethod
    def _literal(template: str, chunk: str) -> str:
        # anything left with a brace is not a valid placeholder
        if "{" in chunk or "}" in chunk:
            raise MalformedTemplateError(template, f"unbalanced brace in {chunk!r}")
        return chunk
