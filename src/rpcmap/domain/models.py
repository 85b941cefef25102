from __future__ import annotations

from typing import Any, Literal, get_args

import httpx
from pydantic import BaseModel, ConfigDict

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE"]

HTTP_METHODS: tuple[str, ...] = get_args(HttpMethod)


class CallDescriptor(BaseModel):
    """
    Fully resolved, transport-ready description of one HTTP call.

    Headers are always empty here; the transport adds its own.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: httpx.URL
    method: HttpMethod
    body: Any = None
    headers: tuple[tuple[str, str], ...] = ()
    response_type: Any = None

    def summary(self) -> dict[str, Any]:
        return {
            "url": str(self.url),
            "method": self.method,
            "body": self.body,
            "headers": [list(h) for h in self.headers],
            "response_type": type_label(self.response_type),
        }


def type_label(tp: Any) -> str:
    # int -> "int", list[int] -> "list[int]"
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
