from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from rpcmap.collaborators.protocols import ParameterValueResolver
from rpcmap.contract.model import MethodContract, ParamRole
from rpcmap.domain.errors import UnresolvableParameterNameError
from rpcmap.mapping.names import Resolved, resolve_name


@dataclass(frozen=True)
class Bindings:
    """Per-invocation values bound against a contract."""

    path_variables: Dict[str, Optional[str]] = field(default_factory=dict)
    query_params: Tuple[Tuple[str, str], ...] = ()   # multimap, insertion order
    body: Any = None
    has_body: bool = False


def _binding_name(contract: MethodContract, index: int) -> str:
    p = contract.parameters[index]
    res = resolve_name(p.declared_name, p.discovered_name)
    if not isinstance(res, Resolved):
        raise UnresolvableParameterNameError(contract.name, index, p.role.value)
    return res.name


def bind_parameters(
    contract: MethodContract,
    args: Sequence[Any],
    resolver: ParameterValueResolver,
) -> Bindings:
    """
    Classify every parameter by role and bind its runtime value.

    - path variable: always bound, None when the resolver has no value
    - query parameter: omitted when the resolver has no value
    - body: raw argument, untouched
    - none: ignored
    """
    path_variables: Dict[str, Optional[str]] = {}
    query_params: list[Tuple[str, str]] = []
    body: Any = None
    has_body = False

    for p in contract.parameters:
        if p.role is ParamRole.PATH_VARIABLE:
            name = _binding_name(contract, p.index)
            path_variables[name] = resolver.resolve(contract, args, p.index)

        elif p.role is ParamRole.QUERY_PARAM:
            name = _binding_name(contract, p.index)
            value = resolver.resolve(contract, args, p.index)
            if value is not None:
                query_params.append((name, value))

        elif p.role is ParamRole.BODY:
            body = args[p.index]
            has_body = True

    return Bindings(
        path_variables=path_variables,
        query_params=tuple(query_params),
        body=body,
        has_body=has_body,
    )
