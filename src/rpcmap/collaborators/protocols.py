"""Collaborators the assembler delegates to: value rendering and URL building."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

import httpx

from rpcmap.contract.model import MethodContract


@runtime_checkable
class ParameterValueResolver(Protocol):
    """
    Renders one runtime argument as a string, or None to omit it.

    Role metadata and discovered names travel on `contract.parameters`.
    Must be total for a valid index and free of side effects.
    """

    def resolve(self, contract: MethodContract, args: Sequence[Any], index: int) -> Optional[str]:
        ...


@runtime_checkable
class UrlBuilder(Protocol):
    """Expands a path template against a base URL; fails loudly on bad templates."""

    def build(
        self,
        base_url: str,
        path_template: str,
        query_params: Sequence[tuple[str, str]],
        path_variables: Mapping[str, Optional[str]],
    ) -> httpx.URL:
        ...
