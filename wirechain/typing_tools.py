"""Runtime type introspection used to key, match and call registered values."""

import abc
import inspect
import types
import typing

from typing_extensions import get_protocol_members, is_protocol

from wirechain.exceptions import InterfaceRequiredError, NotCallableError


Key: typing.TypeAlias = typing.Any
"""A hashable runtime type descriptor: a class, a parameterized generic or an ``Annotated`` form."""


def type_of(value: typing.Any) -> Key:  # noqa: ANN401
    """Get the key a value is mapped under when no key is given explicitly."""
    return type(value)


def _origin_class(key: Key) -> type | None:
    # get_origin first: on Python 3.10 isinstance(list[int], type) is true
    origin = typing.get_origin(key)
    if origin is not None:
        if origin in (types.UnionType, typing.Annotated) or not inspect.isclass(origin):
            return None
        return typing.cast(type, origin)
    return key if inspect.isclass(key) else None


def is_interface(key: Key) -> bool:
    """Check whether a key names an interface.

    Protocols, abstract classes and classes deriving directly from ``abc.ABC`` are
    interfaces. Parameterized generics are judged by their origin class.
    """
    cls = _origin_class(key)
    if cls is None:
        return False
    return is_protocol(cls) or inspect.isabstract(cls) or abc.ABC in cls.__bases__


def _declared_members(cls: type) -> set[str]:
    members = set(dir(cls))
    for klass in cls.__mro__:
        members.update(inspect.get_annotations(klass))
    return members


def _arguments_match(candidate: Key, candidate_cls: type, interface: Key) -> bool:
    interface_origin = typing.get_origin(interface)
    if interface_origin is None:
        return True
    wanted = typing.get_args(interface)
    if typing.get_origin(candidate) is not None:
        return typing.get_origin(candidate) is interface_origin and typing.get_args(candidate) == wanted

    # a concrete class binds the arguments in its bases, e.g. class IntSource(Source[int])
    for klass in candidate_cls.__mro__:
        for base in klass.__dict__.get("__orig_bases__", ()):
            if typing.get_origin(base) is interface_origin and typing.get_args(base) == wanted:
                return True
    return False


def implements(candidate: Key, interface: Key) -> bool:
    """Check whether a registered key satisfies an interface key.

    Nominal subclasses (including ``ABC.register`` virtual subclasses) always qualify.
    Protocols are also satisfied structurally, by providing every protocol member.
    A parameterized interface also requires the same type arguments, either on the
    candidate key itself or bound in the bases of a concrete class.
    """
    candidate_cls = _origin_class(candidate)
    interface_cls = _origin_class(interface)
    if candidate_cls is None or interface_cls is None:
        return False

    if interface_cls in candidate_cls.__mro__:
        matches = True
    elif is_protocol(interface_cls):
        matches = get_protocol_members(interface_cls) <= _declared_members(candidate_cls)
    else:
        try:
            matches = issubclass(candidate_cls, interface_cls)
        except TypeError:
            matches = False
    return matches and _arguments_match(candidate, candidate_cls, interface)


def interface_of(witness: typing.Any) -> Key:  # noqa: ANN401
    """Get the interface named by a witness.

    Any number of ``type[...]`` layers around the interface are unwrapped.

    Args:
        witness: the interface, optionally wrapped as ``type[Interface]``.

    Returns:
        The interface key.

    Raises:
        InterfaceRequiredError: if the witness does not name an interface.

    """
    key = witness
    while typing.get_origin(key) is type:
        (key,) = typing.get_args(key)

    if not is_interface(key):
        msg = f"Called interface_of with {witness!r}, which is not an interface (a Protocol or an abstract class)"
        raise InterfaceRequiredError(msg)
    return key


def signature_of(func: typing.Callable[..., typing.Any]) -> inspect.Signature:
    """Get the signature of a callable with string annotations evaluated.

    Raises:
        NotCallableError: if func is not callable.

    """
    if not callable(func):
        msg = f"{func!r} is not callable"
        raise NotCallableError(msg)
    return inspect.signature(func, eval_str=True)


def provided_types(provider: typing.Callable[..., typing.Any]) -> list[tuple[Key, int | None]]:
    """List the keys a provider yields, with the position of each in its result.

    A class provides itself. A callable annotated ``-> tuple[A, B]`` provides ``A`` at
    position 0 and ``B`` at position 1. Any other return annotation provides a single
    value (position ``None``). No annotation, ``None`` and ``tuple[()]`` provide nothing.
    """
    if inspect.isclass(provider):
        return [(provider, None)]

    returns = signature_of(provider).return_annotation
    if returns in (inspect.Signature.empty, None, type(None)):
        return []

    if returns == tuple[()] or typing.get_args(returns) == ((),):
        return []
    if typing.get_origin(returns) is tuple:
        args = typing.get_args(returns)
        if args and Ellipsis not in args:
            return [(arg, position) for position, arg in enumerate(args)]

    return [(returns, None)]
