import pytest

from micro_aad.core.tape import use_tape


@pytest.fixture(autouse=True)
def tape():
    """Record every test on its own tape."""
    with use_tape() as t:
        yield t
