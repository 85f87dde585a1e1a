import abc
import typing

from wirechain.context import ResolutionContext


T_co = typing.TypeVar("T_co", covariant=True)


class MappedValue(typing.Generic[T_co], abc.ABC):
    """Base class for everything a scope can store under a key.

    A mapped value is either static, fixed at mapping time, or dynamic, computed at
    retrieval time from other mapped values.
    """

    __slots__ = ()

    @abc.abstractmethod
    def get(self, context: ResolutionContext) -> T_co:
        """Retrieve the value for the current retrieval."""
