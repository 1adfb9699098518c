import pytest

from tests.helpers import reset_all


@pytest.fixture(autouse=True)
def clean_state():
    reset_all()
    yield
    reset_all()
