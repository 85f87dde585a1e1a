import enum
import typing

from typing_extensions import override


T = typing.TypeVar("T")


class NotFound(enum.Enum):
    """Result of a lookup that matched nothing along the whole scope chain.

    Its single member is falsy and survives copying and pickling as the same object.
    """

    NOT_FOUND = "NOT_FOUND"

    def __bool__(self) -> bool:
        return False

    @override
    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND: typing.Final = NotFound.NOT_FOUND


def is_found(value: T | typing.Literal[NotFound.NOT_FOUND]) -> typing.TypeGuard[T]:
    """Check if a lookup result is a value (not NOT_FOUND).

    A stored ``None``, ``0`` or ``""`` is still a found value.
    """
    return value is not NOT_FOUND
