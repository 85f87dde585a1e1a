import abc
import typing

import typing_extensions

from wirechain.context import ResolutionContext
from wirechain.typing_tools import Key


class Applicator(abc.ABC):
    """Interface for objects that inject mapped values into attributes."""

    @abc.abstractmethod
    def inject_into(self, target: object) -> None:
        """Set every attribute of target tagged with ``Inject`` to its mapped value.

        Raises:
            DependencyNotFoundError: if a tagged attribute cannot be resolved.

        """


class Invoker(abc.ABC):
    """Interface for objects that call functions with mapped arguments."""

    @abc.abstractmethod
    def invoke(self, func: typing.Callable[..., typing.Any]) -> typing.Any:  # noqa: ANN401
        """Call func, supplying each parameter from the mapped values by its type.

        Raises:
            DependencyNotFoundError: if a parameter cannot be resolved.

        """


class TypeMapper(abc.ABC):
    """Interface for objects that map values by type."""

    @abc.abstractmethod
    def map_value(self, value: object) -> typing_extensions.Self:
        """Map value under its own type."""

    @abc.abstractmethod
    def map_as(self, value: object, witness: typing.Any) -> typing_extensions.Self:  # noqa: ANN401
        """Map value under the interface named by witness."""

    @abc.abstractmethod
    def map_provider(self, provider: typing.Callable[..., typing.Any]) -> typing_extensions.Self:
        """Map provider as the source of each of its declared return types.

        The provider is invoked through ``Invoker.invoke`` on every retrieval, so it
        may take any number of injectable arguments. Results are never cached.
        Providers must not depend on each other in a cycle.
        """

    @abc.abstractmethod
    def set_raw(self, key: Key, value: object) -> typing_extensions.Self:
        """Map value under an explicit key, without inferring it."""

    @abc.abstractmethod
    def get(self, key: Key, *, context: ResolutionContext | None = None) -> typing.Any:  # noqa: ANN401
        """Return the value mapped to key, or ``NOT_FOUND``."""


class Injector(Applicator, Invoker, TypeMapper, abc.ABC):
    """Interface for objects that map values and inject them into functions and objects."""

    @abc.abstractmethod
    def set_parent(self, parent: typing.Optional["Injector"]) -> None:
        """Set the injector consulted when a key is not mapped here."""
