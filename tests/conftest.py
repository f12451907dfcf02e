import asyncio

import pytest

from blog_search.core.errors import IndexFetchError
from blog_search.search.models import SearchRecord


SAMPLE_INDEX = [
    {"title": "ArgoCD Setup", "permalink": "/posts/argocd", "tags": ["argocd"]},
    {"title": "PostgreSQL psql Basics", "permalink": "/posts/psql", "tags": ["psql"]},
]


class FakeIndexSource:
    """Index source returning fixed records, an error, or waiting on a gate."""

    def __init__(self, records=None, error=None, gate=None):
        self.records = records if records is not None else []
        self.error = error
        self.gate = gate
        self.calls = 0

    async def fetch(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return tuple(self.records)


@pytest.fixture
def sample_records():
    return [SearchRecord(**r) for r in SAMPLE_INDEX]


@pytest.fixture
def ok_source(sample_records):
    return FakeIndexSource(records=sample_records)


@pytest.fixture
def failing_source():
    return FakeIndexSource(error=IndexFetchError("connection refused"))


@pytest.fixture
def gated_source(sample_records):
    return FakeIndexSource(records=sample_records, gate=asyncio.Event())
