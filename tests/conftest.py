"""
Shared pytest fixtures and configuration for all tests.
"""

import asyncio
import os
import random
from typing import Any

import pytest

# Settings() is built at import time and needs a signing key.
os.environ.setdefault("JWT_SECRET", "test-suite-jwt-secret-at-least-32-bytes")

from quizgraph.core.config import Settings
from quizgraph.graphql.context import Services, build_context, build_services
from quizgraph.graphql.schema import schema
from quizgraph.repositories.memory_store import MemoryStore


class InterleavingStore(MemoryStore):
    """MemoryStore that yields to the event loop on every read, so
    concurrent writers interleave between their check and their insert."""

    async def find_one(self, collection, filters):
        await asyncio.sleep(0)
        return await super().find_one(collection, filters)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        STORE_BACKEND="memory",
        JWT_SECRET="fixture-jwt-secret-at-least-32-bytes",
        TOKEN_TTL_MINUTES=5,
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def services(store: MemoryStore, test_settings: Settings) -> Services:
    svc = build_services(store, test_settings)
    svc.quizzes.slugs.rng = random.Random(1234)
    return svc


@pytest.fixture
def execute(services: Services):
    """Run a GraphQL document against the schema with an in-memory store."""

    async def _execute(query: str, variables: dict[str, Any] | None = None, token: str | None = None):
        context = build_context(services)
        if token is not None:
            context["token"] = token
        return await schema.execute(query, variable_values=variables, context_value=context)

    return _execute
