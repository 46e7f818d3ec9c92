import pytest

from tests.unit.fakes import FakeAdmin, FakeSender


@pytest.fixture
def fake_sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def fake_admin() -> FakeAdmin:
    return FakeAdmin()


@pytest.fixture
def sleeps() -> list[float]:
    return []
