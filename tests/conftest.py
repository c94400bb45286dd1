import pytest

from tests.utils import RecordingConnection


@pytest.fixture
def conn():
    return RecordingConnection(rows=[("inv-1",)])
