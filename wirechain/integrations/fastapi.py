import logging
import typing

from fastapi import Depends, Request

from wirechain.scope import Scope
from wirechain.typing_tools import Key


logger: typing.Final = logging.getLogger(__name__)


class RequestScope:
    """FastAPI dependency that opens a child scope per request.

    The current ``fastapi.Request`` is mapped into the child, so providers mapped on
    the root that take a ``Request`` receive the one being served.

    Example:
        ```python
        root = Scope(name="app").map_provider(make_current_user)  # make_current_user(request: Request)
        request_scope = RequestScope(root)

        @app.get("/me")
        def read_me(user: User = request_scope.resolve(User)) -> str:
            return user.name
        ```

    """

    def __init__(self, root: Scope) -> None:
        """Create a new RequestScope.

        Args:
            root: scope every per-request scope is a child of.

        """
        self._root = root

    @property
    def root(self) -> Scope:
        """The scope every per-request scope is a child of."""
        return self._root

    def __call__(self, request: Request) -> Scope:
        """Create the scope of the current request.

        FastAPI caches dependencies per request, so every ``resolve`` in one request
        shares the scope returned here.
        """
        logger.debug("Opening a request scope for %s %s", request.method, request.url.path)
        return self._root.child(name="request").set_raw(Request, request)

    def resolve(self, key: Key) -> typing.Any:  # noqa: ANN401
        """Get a ``Depends`` that resolves key from the scope of the current request.

        Args:
            key: type to resolve.

        Returns:
            A value usable as a parameter default or in ``Annotated[..., ]``.

        """

        def _resolve(scope: Scope = Depends(self)) -> typing.Any:  # noqa: ANN401
            return scope.resolve(key)

        return Depends(_resolve)
