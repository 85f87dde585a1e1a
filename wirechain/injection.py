import functools
import inspect
import logging
import threading
import typing
import warnings

from typing_extensions import override

from wirechain.exceptions import DependencyNotFoundError, UnannotatedParameterError
from wirechain.interfaces import Injector
from wirechain.typing_tools import Key, signature_of
from wirechain.utils import is_found


logger: typing.Final = logging.getLogger(__name__)
P = typing.ParamSpec("P")
T = typing.TypeVar("T")
_INJECTION_WARNING_MESSAGE: typing.Final[str] = "Expected injection, but nothing found. Remove @inject decorator."
_VARIADIC_KINDS: typing.Final = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_POSITIONAL_KINDS: typing.Final = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_THREADING_LOCK = threading.Lock()
_SIGNATURE_CACHE: dict[typing.Callable[..., typing.Any], inspect.Signature] = {}


class _Inject:
    def __call__(self) -> "_Inject":
        """Marker for automatic dependency injection."""
        return self

    @override
    def __repr__(self) -> str:
        return "Inject"


Inject: typing.Final[_Inject] = _Inject()
"""Tags an attribute (``Annotated[T, Inject]``) or a parameter default (``= Inject``) for injection."""


def split_inject_marker(annotation: typing.Any) -> tuple[Key, bool]:  # noqa: ANN401
    """Strip the ``Inject`` marker from an annotation.

    Returns:
        The key to resolve and whether the marker was present. Any other
        ``Annotated`` metadata stays on the key.

    """
    if typing.get_origin(annotation) is not typing.Annotated:
        return annotation, False

    base, *metadata = typing.get_args(annotation)
    remaining = [item for item in metadata if not isinstance(item, _Inject)]
    if len(remaining) == len(metadata):
        return annotation, False
    if not remaining:
        return base, True
    return typing.Annotated[(base, *remaining)], True


def inject_into(target: object, injector: Injector) -> None:
    """Set every attribute of target tagged with ``Inject`` to its mapped value.

    Attributes are declared with class annotations, so dataclasses, attrs classes,
    pydantic models and plain classes all work. Untagged attributes and ``ClassVar``
    annotations are ignored. Every tagged attribute is resolved before any is set.
    A target whose class declares no annotations is left alone.

    Args:
        target: object to inject into.
        injector: where to resolve attribute types.

    Raises:
        DependencyNotFoundError: if a tagged attribute cannot be resolved.

    """
    hints = typing.get_type_hints(type(target), include_extras=True)
    resolved: dict[str, typing.Any] = {}
    for name, hint in hints.items():
        if typing.get_origin(hint) is typing.ClassVar:
            continue
        key, tagged = split_inject_marker(hint)
        if not tagged:
            continue
        value = injector.get(key)
        if not is_found(value):
            raise DependencyNotFoundError(key)
        resolved[name] = value

    for name, value in resolved.items():
        setattr(target, name, value)


def invoke(func: typing.Callable[..., T], injector: Injector) -> T:
    """Call func, supplying every parameter from injector by its annotated type.

    Parameters that cannot be resolved keep their default if they have one.
    ``*args`` and ``**kwargs`` are left empty.

    Args:
        func: callable to call.
        injector: where to resolve parameter types.

    Returns:
        Whatever func returns. For coroutine functions this is the coroutine.

    Raises:
        NotCallableError: if func is not callable.
        UnannotatedParameterError: if a parameter has neither an annotation nor a default.
        DependencyNotFoundError: if a parameter without a default cannot be resolved.

    """
    args, kwargs = resolve_arguments(func, injector)
    return func(*args, **kwargs)


def resolve_arguments(
    func: typing.Callable[..., typing.Any], injector: Injector
) -> tuple[list[typing.Any], dict[str, typing.Any]]:
    """Resolve the arguments ``invoke`` would call func with, without calling it."""
    signature = signature_of(func)
    args: list[typing.Any] = []
    kwargs: dict[str, typing.Any] = {}
    for name, param in signature.parameters.items():
        if param.kind in _VARIADIC_KINDS:
            continue

        has_default = param.default is not inspect.Parameter.empty
        if param.annotation is inspect.Parameter.empty:
            if not has_default:
                msg = f"Parameter {name!r} of {func!r} has no type annotation"
                raise UnannotatedParameterError(msg)
            value = param.default
        else:
            key, _ = split_inject_marker(param.annotation)
            value = injector.get(key)
            if not is_found(value):
                if not has_default:
                    raise DependencyNotFoundError(key)
                logger.debug("No value for %r, using the default of parameter %r", key, name)
                value = param.default

        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            args.append(value)
        else:
            kwargs[name] = value

    return args, kwargs


def _resolve_marked_arguments(
    signature: inspect.Signature,
    injector: Injector,
    *args: typing.Any,  # noqa: ANN401
    **kwargs: typing.Any,  # noqa: ANN401
) -> tuple[bool, dict[str, typing.Any]]:
    injected = False
    for i, (field_name, param) in enumerate(signature.parameters.items()):
        if not isinstance(param.default, _Inject):
            continue
        injected = True
        if (param.kind in _POSITIONAL_KINDS and i < len(args)) or field_name in kwargs:
            continue

        key, _ = split_inject_marker(param.annotation)
        value = injector.get(key)
        if not is_found(value):
            raise DependencyNotFoundError(key)
        kwargs[field_name] = value
    return injected, kwargs


def _decorated_signature(func: typing.Callable[..., typing.Any]) -> inspect.Signature:
    if func not in _SIGNATURE_CACHE:
        with _THREADING_LOCK:
            _SIGNATURE_CACHE[func] = signature_of(func)
    return _SIGNATURE_CACHE[func]


@typing.overload
def inject(func: typing.Callable[P, T], *, injector: Injector) -> typing.Callable[P, T]: ...


@typing.overload
def inject(*, injector: Injector) -> typing.Callable[[typing.Callable[P, T]], typing.Callable[P, T]]: ...


def inject(
    func: typing.Callable[P, T] | None = None,
    *,
    injector: Injector,
) -> typing.Callable[P, T] | typing.Callable[[typing.Callable[P, T]], typing.Callable[P, T]]:
    """Mark a function for dependency injection.

    Parameters whose default is ``Inject`` are resolved from injector on every call
    unless the caller passes them explicitly.

    Args:
        func: sync or coroutine function to be wrapped.
        injector: where to resolve marked parameters.

    Returns:
        wrapped function.

    """

    def _inject(func: typing.Callable[P, T]) -> typing.Callable[P, T]:
        if inspect.iscoroutinefunction(func):
            return typing.cast(typing.Callable[P, T], _inject_to_async(func))
        return _inject_to_sync(func)

    def _inject_to_async(
        func: typing.Callable[P, typing.Coroutine[typing.Any, typing.Any, T]],
    ) -> typing.Callable[P, typing.Coroutine[typing.Any, typing.Any, T]]:
        @functools.wraps(func)
        async def inner(*args: P.args, **kwargs: P.kwargs) -> T:
            injected, kwargs = _resolve_marked_arguments(_decorated_signature(func), injector, *args, **kwargs)  # type: ignore[assignment]
            if not injected:
                warnings.warn(_INJECTION_WARNING_MESSAGE, RuntimeWarning, stacklevel=2)
            return await func(*args, **kwargs)

        return inner

    def _inject_to_sync(func: typing.Callable[P, T]) -> typing.Callable[P, T]:
        @functools.wraps(func)
        def inner(*args: P.args, **kwargs: P.kwargs) -> T:
            injected, kwargs = _resolve_marked_arguments(_decorated_signature(func), injector, *args, **kwargs)  # type: ignore[assignment]
            if not injected:
                warnings.warn(_INJECTION_WARNING_MESSAGE, RuntimeWarning, stacklevel=2)
            return func(*args, **kwargs)

        return inner

    if func is None:
        return _inject
    return _inject(func)
