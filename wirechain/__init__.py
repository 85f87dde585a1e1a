"""Type-keyed dependency injection with chained scopes."""

from wirechain import values
from wirechain.context import ResolutionContext
from wirechain.exceptions import (
    ContractViolationError,
    DependencyNotFoundError,
    InterfaceRequiredError,
    NotCallableError,
    ProviderInvocationError,
    UnannotatedParameterError,
    WirechainError,
)
from wirechain.injection import Inject, inject
from wirechain.interfaces import Applicator, Injector, Invoker, TypeMapper
from wirechain.scope import Scope
from wirechain.typing_tools import interface_of
from wirechain.utils import NOT_FOUND, is_found


__all__ = [
    "NOT_FOUND",
    "Applicator",
    "ContractViolationError",
    "DependencyNotFoundError",
    "Inject",
    "Injector",
    "InterfaceRequiredError",
    "Invoker",
    "NotCallableError",
    "ProviderInvocationError",
    "ResolutionContext",
    "Scope",
    "TypeMapper",
    "UnannotatedParameterError",
    "WirechainError",
    "inject",
    "interface_of",
    "is_found",
    "values",
]
