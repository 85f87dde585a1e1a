import typing


class WirechainError(Exception):
    """Base class for all wirechain errors."""


class DependencyNotFoundError(WirechainError, LookupError):
    """Exception raised when no value is mapped to a type."""

    def __init__(self, dependency: typing.Any) -> None:  # noqa: ANN401
        """Create a new error for an unresolved dependency.

        Args:
            dependency: type that could not be resolved.

        """
        super().__init__(f"Value not found for type {dependency!r}")
        self.dependency = dependency


class ContractViolationError(WirechainError, TypeError):
    """Exception raised when the engine is called with arguments that can never work."""


class InterfaceRequiredError(ContractViolationError):
    """Exception raised when a witness does not name an interface."""


class NotCallableError(ContractViolationError):
    """Exception raised when a provider or an invoked target is not callable."""


class UnannotatedParameterError(ContractViolationError):
    """Exception raised when a parameter has neither a type annotation nor a default."""


class ProviderInvocationError(WirechainError, RuntimeError):
    """Exception raised when a provider cannot be invoked because its own dependencies are missing."""
