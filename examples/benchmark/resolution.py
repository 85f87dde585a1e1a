import logging
import random
import time

from wirechain import Scope


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class Grandparent(float):
    pass


class Parent(float):
    pass


def _make_parent(x: Grandparent) -> Parent:
    return Parent(x)


root = Scope(name="root").map_value(Grandparent(random.random())).map_provider(_make_parent)


def _injected(x_1: Grandparent, x_2: Parent, x_3: float) -> float:
    return x_1 + x_2 + x_3


def _bench(n_iterations: int) -> float:
    start = time.time()
    for _ in range(n_iterations):
        request = root.child(name="request").map_value(random.random())
        request.invoke(_injected)
    end = time.time()
    return end - start


if __name__ == "__main__":
    for n in [10000, 100000, 1000000]:
        duration = _bench(n)
        logger.info(f"Injected {n} times in {duration:.4f} seconds")  # noqa: G004
