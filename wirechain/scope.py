import logging
import typing

import typing_extensions
from typing_extensions import override

from wirechain import injection
from wirechain.context import ResolutionContext
from wirechain.exceptions import DependencyNotFoundError
from wirechain.interfaces import Injector
from wirechain.typing_tools import Key, implements, interface_of, is_interface, provided_types, type_of
from wirechain.utils import NOT_FOUND, is_found
from wirechain.values import LiteralValue, MappedValue, ProvidedValue


logger: typing.Final = logging.getLogger(__name__)
P = typing.ParamSpec("P")
T = typing.TypeVar("T")


class Scope(Injector):
    """A registry of values keyed by type, with an optional parent.

    Lookups that find nothing here are delegated to the parent. A child scope can
    therefore override any value of its parent for its own callers, and providers
    mapped on the parent will see the override when resolved from the child.

    A scope is not safe for concurrent registration. Retrieval from several threads
    is fine once no more registrations are in flight.

    Example:
        ```python
        root = Scope().map_value(settings).map_provider(make_repository)
        request_scope = root.child().map_value(request)
        request_scope.invoke(handle)
        ```

    """

    __slots__ = "_name", "_parent", "_values"

    def __init__(self, parent: Injector | None = None, *, name: str | None = None) -> None:
        """Create a new scope.

        Args:
            parent: scope consulted for keys not mapped in this one.
            name: label used in repr and log records.

        """
        self._values: dict[Key, MappedValue[typing.Any]] = {}
        self._parent = parent
        self._name = name

    @property
    def parent(self) -> Injector | None:
        """The scope consulted for keys not mapped in this one."""
        return self._parent

    @property
    def name(self) -> str | None:
        """Label of the scope."""
        return self._name

    def child(self, *, name: str | None = None) -> "Scope":
        """Create a new scope whose parent is this one."""
        return Scope(self, name=name)

    def _store(self, key: Key, value: MappedValue[typing.Any]) -> None:
        logger.debug("Mapping %r to %r in %r", key, value, self)
        self._values[key] = value

    @override
    def map_value(self, value: object) -> typing_extensions.Self:
        self._store(type_of(value), LiteralValue(value))
        return self

    @override
    def map_as(self, value: object, witness: typing.Any) -> typing_extensions.Self:
        self._store(interface_of(witness), LiteralValue(value))
        return self

    @override
    def map_provider(self, provider: typing.Callable[..., typing.Any]) -> typing_extensions.Self:
        outputs = provided_types(provider)
        if not outputs:
            logger.debug("Provider %r declares no return types, nothing is mapped", provider)
        for key, position in outputs:
            self._store(key, ProvidedValue(provider, position))
        return self

    @override
    def set_raw(self, key: Key, value: object) -> typing_extensions.Self:
        self._store(key, LiteralValue(value))
        return self

    @override
    def set_parent(self, parent: Injector | None) -> None:
        self._parent = parent

    @override
    def get(self, key: Key, *, context: ResolutionContext | None = None) -> typing.Any:
        if context is None:
            context = ResolutionContext(youngest=self)
        elif not isinstance(context, ResolutionContext):
            msg = f"Unrecognized resolution context: {context!r}"
            raise TypeError(msg)

        mapped = self._values.get(key)
        if mapped is not None:
            return mapped.get(context)

        # nothing mapped under the key itself, look for an implementation of it
        if is_interface(key):
            for registered, mapped in self._values.items():
                if implements(registered, key):
                    logger.debug("Resolved %r through %r in %r", key, registered, self)
                    return mapped.get(context)

        if self._parent is not None:
            logger.debug("Delegating %r from %r to %r", key, self, self._parent)
            return self._parent.get(key, context=context)

        logger.debug("No value found for %r, searched from %r", key, context.youngest)
        return NOT_FOUND

    def resolve(self, key: Key) -> typing.Any:  # noqa: ANN401
        """Return the value mapped to key.

        Raises:
            DependencyNotFoundError: if key is not mapped anywhere along the chain.

        """
        value = self.get(key)
        if not is_found(value):
            raise DependencyNotFoundError(key)
        return value

    @override
    def invoke(self, func: typing.Callable[..., T]) -> T:
        return injection.invoke(func, self)

    @override
    def inject_into(self, target: object) -> None:
        injection.inject_into(target, self)

    def inject(self, func: typing.Callable[P, T]) -> typing.Callable[P, T]:
        """Wrap func so its parameters defaulting to ``Inject`` are resolved here on each call."""
        return injection.inject(func, injector=self)

    @override
    def __repr__(self) -> str:
        return f"Scope({self._name!r})" if self._name else f"Scope(at {id(self):#x})"
