import pytest
from fastapi.testclient import TestClient

from wordshare import main
from wordshare.schemas import Dataset


class MemoryStore:
    """Stands in for the gist: keeps the last written document as plain JSON data."""

    def __init__(self, data=None):
        self.data = data
        self.writes = 0
        self.fail_reads = False

    async def read(self):
        if self.fail_reads or self.data is None:
            return None
        return Dataset.model_validate(self.data)

    async def write(self, dataset):
        self.data = dataset.model_dump(mode="json")
        self.writes += 1
        return True


@pytest.fixture
def store():
    return MemoryStore({"words": []})


@pytest.fixture
def emitted(monkeypatch):
    events = []

    async def fake_emit(event, data=None, **kwargs):
        events.append((event, data))

    monkeypatch.setattr(main.sio, "emit", fake_emit)
    return events


@pytest.fixture
def client(store, emitted, monkeypatch):
    monkeypatch.setattr(main.words, "store", store)
    with TestClient(main.app) as c:
        yield c
