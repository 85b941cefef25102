from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from rpcmap.collaborators.defaults import DefaultParameterResolver, HttpxUrlBuilder
from rpcmap.collaborators.protocols import ParameterValueResolver, UrlBuilder
from rpcmap.config import ClientConfig
from rpcmap.contract.declare import bind_arguments, contract_for
from rpcmap.contract.model import MethodContract
from rpcmap.domain.errors import NoResponseBodyContractError
from rpcmap.domain.models import CallDescriptor
from rpcmap.mapping.binder import bind_parameters
from rpcmap.mapping.response import resolve_response_type
from rpcmap.mapping.routes import resolve_path_template, validate_path_variables
from rpcmap.mapping.verbs import resolve_http_method

log = logging.getLogger(__name__)


class CallAssembler:
    """
    Maps one client method invocation to a CallDescriptor.

    Stateless across calls and performs no I/O; safe to share between threads.
    """

    def __init__(
        self,
        base_url: str,
        resolver: Optional[ParameterValueResolver] = None,
        url_builder: Optional[UrlBuilder] = None,
    ) -> None:
        self.base_url = base_url
        self.resolver = resolver or DefaultParameterResolver()
        self.url_builder = url_builder or HttpxUrlBuilder()

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> CallAssembler:
        return cls(config.base_url, **kwargs)

    def assemble(self, contract: MethodContract, args: Sequence[Any]) -> CallDescriptor:
        if not contract.response_body:
            raise NoResponseBodyContractError(contract.name)

        template = resolve_path_template(
            contract.type_route, contract.method_route, method_name=contract.name
        )
        bindings = bind_parameters(contract, args, self.resolver)
        validate_path_variables(template, bindings.path_variables, method_name=contract.name)
        method = resolve_http_method(contract.method_route)
        response_type = resolve_response_type(contract.response_type)

        url = self.url_builder.build(
            self.base_url, template, bindings.query_params, bindings.path_variables
        )
        log.debug("%s -> %s %s", contract.name, method, url)

        return CallDescriptor(
            url=url,
            method=method,
            body=bindings.body,
            headers=(),
            response_type=response_type,
        )

    def describe(self, owner: type, method_name: str, *args: Any, **kwargs: Any) -> CallDescriptor:
        """Same as calling `owner().method_name(*args, **kwargs)` on a generated client."""
        contract = contract_for(owner, method_name)
        if not contract.response_body:
            raise NoResponseBodyContractError(contract.name)
        return self.assemble(contract, bind_arguments(owner, method_name, args, kwargs))
