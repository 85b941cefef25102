"""Errors raised while mapping a method invocation to a call descriptor."""
from __future__ import annotations

from typing import Iterable


class MappingError(Exception):
    """Base class; `method` names the contract that failed to resolve."""

    def __init__(self, method: str, message: str) -> None:
        super().__init__(message)
        self.method = method


class InvalidContractError(MappingError):
    """A method contract cannot be built from its declarations."""


class ArgumentBindingError(MappingError):
    """Call arguments do not fit the client method's signature."""


class NoResponseBodyContractError(MappingError):
    def __init__(self, method: str) -> None:
        super().__init__(method, f"The method {method} does not return response body")


class UnmappedMethodError(MappingError):
    def __init__(self, method: str) -> None:
        super().__init__(method, f"The method {method} is not mapped")


class UnresolvableParameterNameError(MappingError):
    def __init__(self, method: str, index: int, role: str) -> None:
        super().__init__(
            method,
            f"Name of a {role} at position {index} can't be resolved during the method {method} call",
        )
        self.index = index
        self.role = role


class UnboundPathVariablesError(MappingError):
    def __init__(self, method: str, missing: Iterable[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(
            method,
            "Every url template variable needs a path variable parameter on "
            f"{method}. Unbound variables: {list(self.missing)}",
        )


class MalformedTemplateError(ValueError):
    """Raised by the URL builder on a template it cannot expand."""

    def __init__(self, template: str, reason: str) -> None:
        super().__init__(f"Malformed path template {template!r}: {reason}")
        self.template = template
        self.reason = reason
