import pytest  # noqa: F401
from installation_planner.utils.misc import incrf


def test_incrf():
    counter = incrf()
    assert next(counter) == 1
    assert next(counter) == 2
    assert next(counter) == 3


def test_incrf_start():
    counter = incrf(42)
    assert next(counter) == 42
    assert next(counter) == 43
