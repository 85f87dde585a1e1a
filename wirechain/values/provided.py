import logging
import typing

from typing_extensions import override

from wirechain.context import ResolutionContext
from wirechain.exceptions import DependencyNotFoundError, ProviderInvocationError
from wirechain.injection import resolve_arguments
from wirechain.values.base import MappedValue


logger: typing.Final = logging.getLogger(__name__)
T_co = typing.TypeVar("T_co", covariant=True)


class ProvidedValue(MappedValue[T_co]):
    """Computes a value by calling a provider on every retrieval.

    The provider's own arguments are resolved against the youngest scope of the
    retrieval, not the scope the provider was mapped on. Only a failure to resolve
    those arguments becomes a ``ProviderInvocationError``. Whatever the provider body
    raises propagates unchanged. Results are never cached, so a provider can return
    something different per logical operation, such as a service bound to the
    current request.

    Example:
        ```python
        def make_connection(settings: Settings) -> Connection:
            return Connection(settings.dsn)

        value = ProvidedValue(make_connection)
        value.get(context)  # a new Connection each time
        ```

    """

    __slots__ = ("_position", "_provider")

    def __init__(self, provider: typing.Callable[..., typing.Any], position: int | None = None) -> None:
        """Initialize a ProvidedValue.

        Args:
            provider: callable producing the value.
            position: index of the value in the provider's result, or None when the
                result is the value itself.

        """
        self._provider: typing.Final = provider
        self._position: typing.Final = position

    @property
    def provider(self) -> typing.Callable[..., typing.Any]:
        """The wrapped provider callable."""
        return self._provider

    @property
    def position(self) -> int | None:
        """Index of the value in the provider's result."""
        return self._position

    @override
    def get(self, context: ResolutionContext) -> T_co:
        logger.debug("Invoking provider %r against %r", self._provider, context.youngest)
        try:
            args, kwargs = resolve_arguments(self._provider, context.youngest)
        except DependencyNotFoundError as e:
            msg = f"Provider {self._provider!r} could not be invoked: {e}"
            raise ProviderInvocationError(msg) from e

        result = self._provider(*args, **kwargs)
        if self._position is None:
            return typing.cast(T_co, result)
        return typing.cast(T_co, result[self._position])

    @override
    def __repr__(self) -> str:
        return f"ProvidedValue({self._provider!r}, position={self._position!r})"
