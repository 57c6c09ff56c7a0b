import pytest

from support import FakeAdminClient


@pytest.fixture
def admin():
    return FakeAdminClient()
