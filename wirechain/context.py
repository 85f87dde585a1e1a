import dataclasses
import typing


if typing.TYPE_CHECKING:
    from wirechain.interfaces import Injector


@dataclasses.dataclass(frozen=True, slots=True)
class ResolutionContext:
    """State carried through a single external retrieval.

    ``youngest`` is the scope application code called ``get`` on. Keeping hold of it
    while walking up the parent chain lets providers mapped on an ancestor still
    receive values mapped only on that scope, such as the current request::

        root = Scope().map_provider(make_greeting)  # make_greeting(request: Request)
        child = root.child().map_value(request)
        child.resolve(Greeting)  # make_greeting gets the child's request

    If ``get`` passed its receiver instead, each step up the chain would narrow the
    set of values a provider could receive.
    """

    youngest: "Injector"
