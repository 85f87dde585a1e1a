import typing

from typing_extensions import override

from wirechain.context import ResolutionContext
from wirechain.values.base import MappedValue


T_co = typing.TypeVar("T_co", covariant=True)


class LiteralValue(MappedValue[T_co]):
    """Holds a value "as is", returned unchanged by every retrieval.

    Example:
        ```python
        value = LiteralValue(1)
        value.get(context)  # 1
        ```

    """

    __slots__ = ("_value",)

    def __init__(self, value: T_co) -> None:
        """Initialize with the value to hold.

        Args:
            value (T_co): The value to be returned.

        """
        self._value: typing.Final = value

    @override
    def get(self, context: ResolutionContext) -> T_co:
        return self._value

    @override
    def __repr__(self) -> str:
        return f"LiteralValue({self._value!r})"
