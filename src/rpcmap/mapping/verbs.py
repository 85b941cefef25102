from __future__ import annotations

from typing import Optional

from rpcmap.contract.model import RouteTemplate
from rpcmap.domain.models import HttpMethod
from rpcmap.mapping.names import first_or_default


def resolve_http_method(method_route: Optional[RouteTemplate]) -> HttpMethod:
    # no verb declared -> GET; several declared -> the first one
    if method_route is None:
        return "GET"
    return first_or_default(method_route.methods, "GET")  # type: ignore[return-value]
