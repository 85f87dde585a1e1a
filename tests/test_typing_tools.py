import abc
import collections.abc
import dataclasses
import typing

import pytest

from tests.components import Clock, Counter, FixedClock, MemoryRepository, NumberSource, Repository, Settings, Source
from wirechain import InterfaceRequiredError, NotCallableError, interface_of
from wirechain.typing_tools import implements, is_interface, provided_types, signature_of, type_of


class Marker(abc.ABC):
    """An ABC without abstract methods still names an interface."""


class Named(typing.Protocol):
    name: str


@dataclasses.dataclass
class User:
    name: str


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        (Repository, True),
        (Clock, True),
        (Marker, True),
        (collections.abc.Sized, True),
        (collections.abc.Sequence[int], True),
        (MemoryRepository, False),
        (Settings, False),
        (int, False),
        (list[int], False),
        (typing.Annotated[Repository, "x"], False),
        (None, False),
    ],
)
def test_is_interface(key: typing.Any, expected: bool) -> None:
    assert is_interface(key) is expected


@pytest.mark.parametrize(
    ("candidate", "interface", "expected"),
    [
        (MemoryRepository, Repository, True),
        (Settings, Repository, False),
        (FixedClock, Clock, True),
        (Clock, Clock, True),
        (Settings, Clock, False),
        (User, Named, True),
        (Settings, Named, False),
        (list[int], collections.abc.Sequence, True),
        (list[int], collections.abc.Sequence[str], False),
        (Source[str], Source[int], False),
        (Source[int], Source[int], True),
        (Source[int], Source, True),
        (NumberSource, Source[int], True),
        (NumberSource, Source[str], False),
        (FixedClock, Source[int], False),
        (dict[str, int], collections.abc.Sequence, False),
        (typing.Annotated[MemoryRepository, "x"], Repository, False),
        (None, Repository, False),
    ],
)
def test_implements(candidate: typing.Any, interface: typing.Any, expected: bool) -> None:
    assert implements(candidate, interface) is expected


def test_type_of() -> None:
    assert type_of(1) is int
    assert type_of(None) is type(None)
    assert type_of(Settings()) is Settings


def test_interface_of() -> None:
    assert interface_of(Repository) is Repository
    assert interface_of(type[Clock]) is Clock
    assert interface_of(type[type[Clock]]) is Clock


@pytest.mark.parametrize("witness", [Settings, int, Settings(), None, type[Settings]])
def test_interface_of_rejects_non_interfaces(witness: typing.Any) -> None:
    with pytest.raises(InterfaceRequiredError, match="not an interface"):
        interface_of(witness)


def _single() -> Settings:
    return Settings()  # pragma: no cover


def _pair() -> tuple[Settings, int]:
    return Settings(), 1  # pragma: no cover


def _nothing() -> None: ...


def _empty_tuple() -> tuple[()]:
    return ()  # pragma: no cover


def _generic() -> list[int]:
    return []  # pragma: no cover


@pytest.mark.parametrize(
    ("provider", "expected"),
    [
        (_single, [(Settings, None)]),
        (_pair, [(Settings, 0), (int, 1)]),
        (_nothing, []),
        (_empty_tuple, []),
        (_generic, [(list[int], None)]),
        (MemoryRepository, [(MemoryRepository, None)]),
        (Counter(), [(int, None)]),
    ],
)
def test_provided_types(
    provider: typing.Callable[..., typing.Any],
    expected: list[tuple[typing.Any, int | None]],
) -> None:
    assert provided_types(provider) == expected


def test_signature_of_bound_method() -> None:
    signature = signature_of(MemoryRepository(Settings()).fetch)

    assert list(signature.parameters) == ["key"]


def test_signature_of_evaluates_strings() -> None:
    def func(settings: "Settings") -> "int":
        return 1  # pragma: no cover

    signature = signature_of(func)

    assert signature.parameters["settings"].annotation is Settings
    assert signature.return_annotation is int


def test_signature_of_rejects_non_callable() -> None:
    with pytest.raises(NotCallableError):
        signature_of(None)  # type: ignore[arg-type]
