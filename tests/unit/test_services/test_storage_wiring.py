"""
Storage Backend Wiring Unit Tests
"""

import pytest

from discussion_web.common.errors import StorageConfigurationError
from discussion_web.config import Settings
from discussion_web.repositories.memory import InMemoryRepository, InMemoryRepositoryContext
from discussion_web.repositories.mongo import MongoRepository
from discussion_web.services.storage import (
    InMemoryStorageBackend,
    MongoStorageBackend,
    add_data_services,
    has_connection_string,
)
from factories import Topic


class FakeMongoContext:
    def __init__(self, connection_string):
        self.connection_string = connection_string
        self.closed = False

    async def close(self):
        self.closed = True


class RecordingProbe:
    def __init__(self, result: bool):
        self.result = result
        self.calls = []

    async def __call__(self, connection_string, timeout_ms):
        self.calls.append((connection_string, timeout_ms))
        return self.result


class TestHasConnectionString:
    def test_blank_values(self):
        assert not has_connection_string(None)
        assert not has_connection_string("")
        assert not has_connection_string("   \t\n")

    def test_non_blank_value(self):
        assert has_connection_string("mongodb://localhost/discussion")


class TestAddDataServices:
    """Backend selection."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_connection_string_selects_memory(self, value):
        backend = add_data_services(Settings(mongoConnectionString=value))

        assert isinstance(backend, InMemoryStorageBackend)
        assert backend.repository_class is InMemoryRepository

    def test_connection_string_selects_mongo(self):
        backend = add_data_services(
            Settings(mongoConnectionString=" mongodb://localhost/discussion ", MONGO_PROBE_TIMEOUT_MS=100)
        )

        assert isinstance(backend, MongoStorageBackend)
        assert backend.repository_class is MongoRepository
        assert backend.connection_string == "mongodb://localhost/discussion"
        assert backend.probe_timeout_ms == 100


class TestInMemoryStorageBackend:
    @pytest.mark.asyncio
    async def test_context_is_shared(self):
        backend = InMemoryStorageBackend()

        first = await backend.create_context()
        second = await backend.create_context()
        await backend.release_context(first)
        third = await backend.create_context()

        assert isinstance(first, InMemoryRepositoryContext)
        assert first is second is third

    @pytest.mark.asyncio
    async def test_create_repository(self):
        backend = InMemoryStorageBackend()
        context = await backend.create_context()

        repo = backend.create_repository(context, Topic)

        assert isinstance(repo, InMemoryRepository)
        assert repo.entity_type is Topic
        assert repo.context is context


class TestMongoStorageBackend:
    @pytest.mark.asyncio
    async def test_probe_runs_once_per_context(self):
        probe = RecordingProbe(True)
        backend = MongoStorageBackend(
            "mongodb://localhost/discussion", probe=probe, probe_timeout_ms=50, context_factory=FakeMongoContext
        )

        first = await backend.create_context()
        assert len(probe.calls) == 1
        second = await backend.create_context()

        assert probe.calls == [("mongodb://localhost/discussion", 50)] * 2
        assert first is not second
        assert first.connection_string == "mongodb://localhost/discussion"

    @pytest.mark.asyncio
    async def test_unreachable_database_raises(self):
        probe = RecordingProbe(False)
        created = []

        def factory(connection_string):
            created.append(connection_string)
            return FakeMongoContext(connection_string)

        backend = MongoStorageBackend("mongodb://nowhere/discussion", probe=probe, context_factory=factory)

        with pytest.raises(StorageConfigurationError) as exc_info:
            await backend.create_context()

        assert len(probe.calls) == 1
        assert created == []
        assert exc_info.value.message == "Could not find a database using specified connection string"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_release_closes_context(self):
        backend = MongoStorageBackend(
            "mongodb://localhost/discussion", probe=RecordingProbe(True), context_factory=FakeMongoContext
        )
        context = await backend.create_context()

        await backend.release_context(context)

        assert context.closed is True
