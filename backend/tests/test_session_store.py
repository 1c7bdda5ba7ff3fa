"""Tests for the in-process session store."""

import asyncio
from unittest.mock import patch

import pytest

from config import settings
from models.schemas.partial_profile import PartialProfile
from services import session_store
from services.intake_session import IntakeSession


class _Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, minutes):
        self.now += minutes * 60


@pytest.fixture
def clock():
    clock = _Clock()
    with patch("services.session_store.monotonic", clock):
        yield clock


def test_lookup_checks_owner(clock):
    session = session_store.create_session("client-1")
    assert session_store.get_session(session.session_id, "client-1") is session
    with pytest.raises(KeyError):
        session_store.get_session(session.session_id, "client-2")


def test_idle_session_is_evicted_after_ttl(clock):
    session = session_store.create_session("client-1")
    clock.advance(settings.session_ttl_minutes + 1)
    with pytest.raises(KeyError):
        session_store.get_session(session.session_id, "client-1")


def test_lookup_keeps_session_alive(clock):
    session = session_store.create_session("client-1")
    for _ in range(3):
        clock.advance(settings.session_ttl_minutes - 1)
        assert session_store.get_session(session.session_id, "client-1") is session


def test_creating_a_session_evicts_idle_ones(clock):
    old = session_store.create_session("client-1")
    clock.advance(settings.session_ttl_minutes + 1)
    session_store.create_session("client-2")
    assert old.session_id not in session_store._sessions
    assert len(session_store._sessions) == 1


def test_ttl_comes_from_settings(clock):
    session = session_store.create_session("client-1")
    with patch.object(settings, "session_ttl_minutes", 5):
        clock.advance(6)
        with pytest.raises(KeyError):
            session_store.get_session(session.session_id, "client-1")


class _PendingEnricher:
    def __init__(self):
        self.started = asyncio.Event()

    async def __call__(self, draft):
        self.started.set()
        await asyncio.Event().wait()


class _Parser:
    async def parse(self, payload):
        return PartialProfile(title="Backend Engineer", company_name="Acme")


async def _session_with_pending_enrichment():
    enricher = _PendingEnricher()
    session = IntakeSession("client-1", parser_getter=lambda source: _Parser(), enricher=enricher)
    session_store._sessions[session.session_id] = session
    session_store._last_seen[session.session_id] = session_store.monotonic()
    await session.import_source("text", "pasted posting")
    await enricher.started.wait()
    return session


@pytest.mark.asyncio
async def test_discard_cancels_pending_enrichment(clock):
    session = await _session_with_pending_enrichment()
    task = session._enrichment_task

    session_store.discard(session.session_id)
    with pytest.raises(asyncio.CancelledError):
        await task
    assert task.cancelled()
    with pytest.raises(KeyError):
        session_store.get_session(session.session_id, "client-1")


@pytest.mark.asyncio
async def test_eviction_cancels_pending_enrichment(clock):
    session = await _session_with_pending_enrichment()
    task = session._enrichment_task

    clock.advance(settings.session_ttl_minutes + 1)
    session_store.create_session("client-2")
    with pytest.raises(asyncio.CancelledError):
        await task
    assert task.cancelled()
