import pytest

from tsptour import Deadline, TSPInstance

SQUARE = [(0, 0), (0, 10), (10, 10), (10, 0)]


class StepClock:
    """Deterministic clock: every call advances by `step`."""

    def __init__(self, step=1.0):
        self.t = 0.0
        self.step = step
        self.calls = 0

    def __call__(self):
        self.t += self.step
        self.calls += 1
        return self.t


@pytest.fixture
def square():
    return TSPInstance(coords=list(SQUARE), name="square")


@pytest.fixture
def square_matrix(square):
    return square.distance_matrix()


@pytest.fixture
def far_deadline():
    return Deadline(limit=1e9)


@pytest.fixture
def expired_deadline():
    clock = StepClock()
    return Deadline(limit=0.0, start=-10.0, clock=clock)


@pytest.fixture
def random_instance():
    return TSPInstance.random_euclidean(40, seed=7, square_size=500)
