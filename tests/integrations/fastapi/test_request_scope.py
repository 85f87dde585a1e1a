import dataclasses
import typing
from http import HTTPStatus

import fastapi
import pytest
from starlette.testclient import TestClient

from tests.components import Counter, Settings
from wirechain import NOT_FOUND, DependencyNotFoundError, Scope
from wirechain.integrations.fastapi import RequestScope


@dataclasses.dataclass(kw_only=True, slots=True)
class Greeting:
    text: str


def make_greeting(request: fastapi.Request, settings: Settings) -> Greeting:
    return Greeting(text=f"{request.url.path} on {settings.dsn}")


@pytest.fixture
def request_scope() -> RequestScope:
    root = Scope(name="app").map_value(Settings(dsn="memory://")).map_provider(make_greeting)
    return RequestScope(root)


@pytest.fixture
def fastapi_app(request_scope: RequestScope) -> fastapi.FastAPI:
    app = fastapi.FastAPI()

    @app.get("/hello")
    def read_hello(greeting: Greeting = request_scope.resolve(Greeting)) -> str:
        return greeting.text

    @app.get("/annotated")
    async def read_annotated(
        greeting: typing.Annotated[Greeting, request_scope.resolve(Greeting)],
        settings: typing.Annotated[Settings, request_scope.resolve(Settings)],
    ) -> str:
        return f"{greeting.text} with {settings.dsn}"

    @app.get("/counter")
    def read_counter(
        first: typing.Annotated[int, request_scope.resolve(int)],
        second: typing.Annotated[int, request_scope.resolve(int)],
    ) -> list[int]:
        return [first, second]

    @app.get("/missing")
    def read_missing(value: typing.Annotated[float, request_scope.resolve(float)]) -> float:
        return value  # pragma: no cover

    return app


@pytest.fixture
def fastapi_client(fastapi_app: fastapi.FastAPI) -> TestClient:
    return TestClient(fastapi_app)


def test_provider_on_root_sees_current_request(fastapi_client: TestClient) -> None:
    response = fastapi_client.get("/hello")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == "/hello on memory://"


def test_annotated_dependencies(fastapi_client: TestClient) -> None:
    response = fastapi_client.get("/annotated")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == "/annotated on memory:// with memory://"


def test_scope_is_not_shared_between_requests(request_scope: RequestScope, fastapi_client: TestClient) -> None:
    request_scope.root.map_provider(Counter())

    assert fastapi_client.get("/counter").json() == [1, 2]
    assert fastapi_client.get("/counter").json() == [3, 4]


def test_request_is_not_mapped_on_root(request_scope: RequestScope, fastapi_client: TestClient) -> None:
    fastapi_client.get("/hello")

    assert request_scope.root.get(fastapi.Request) is NOT_FOUND


def test_missing_dependency_raises(fastapi_client: TestClient) -> None:
    with pytest.raises(DependencyNotFoundError, match="float"):
        fastapi_client.get("/missing")
