import pytest

from fake_classroom import FakeClassroomRepo


@pytest.fixture
def repo():
    return FakeClassroomRepo()
