from __future__ import annotations

import asyncio
import collections.abc
import concurrent.futures
from typing import Any, get_args, get_origin

# Deferred-result wrappers; matched by exact identity, never by subclass.
DEFERRED_WRAPPERS = (asyncio.Future, concurrent.futures.Future, collections.abc.Awaitable)


def _is_zero_arg_callable(origin: Any, args: tuple) -> bool:
    return origin is collections.abc.Callable and len(args) == 2 and args[0] == []


def resolve_response_type(declared: Any) -> Any:
    """
    Payload type a transport should deserialize into.

    Future[User] -> User, Callable[[], User] -> User, User -> User.
    Exactly one level is unwrapped: Future[Future[User]] -> Future[User].
    """
    if any(declared is w for w in DEFERRED_WRAPPERS):
        return Any

    origin = get_origin(declared)
    if origin is None:
        return declared

    args = get_args(declared)
    if any(origin is w for w in DEFERRED_WRAPPERS):
        return args[0] if args else Any
    if _is_zero_arg_callable(origin, args):
        return args[1]
    return declared
