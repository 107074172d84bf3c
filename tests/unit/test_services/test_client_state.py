"""Tests for the advisory client state published by ApiClient."""

import asyncio

import httpx
import pytest
from unittest.mock import Mock
from realestatepost.config import ClientConfig
from realestatepost.services.api_client import ApiClient
from realestatepost.services.client_state import ClientState
from realestatepost.utils.errors import ServerError
from tests.fixtures.responses import queue_response
from tests.utils.helpers import json_response


@pytest.mark.unit
def test_client_state_defaults():
    """Test initial state."""
    state = ClientState()

    assert state.in_flight is False
    assert state.last_error is None


@pytest.mark.unit
def test_client_state_transitions():
    """Test begin/fail/succeed transitions and notifications."""
    state = ClientState()
    snapshots = []
    state.subscribe(lambda s: snapshots.append((s.in_flight, s.last_error)))
    error = ServerError("db down", 500)

    state.begin()
    state.fail(error)
    state.begin()
    state.succeed()

    assert snapshots == [
        (True, None),
        (False, error),
        (True, error),
        (False, None),
    ]


@pytest.mark.unit
def test_client_state_unsubscribe():
    """Test that unsubscribed listeners stop receiving updates."""
    state = ClientState()
    listener = Mock()
    unsubscribe = state.subscribe(listener)

    state.begin()
    unsubscribe()
    state.succeed()
    unsubscribe()

    listener.assert_called_once_with(state)


@pytest.mark.unit
def test_failing_listener_does_not_break_others():
    """Test that a raising listener is isolated from the rest."""
    state = ClientState()
    broken = Mock(side_effect=RuntimeError("boom"))
    healthy = Mock()
    state.subscribe(broken)
    state.subscribe(healthy)

    state.begin()

    assert state.in_flight is True
    healthy.assert_called_once_with(state)


@pytest.mark.unit
def test_settle_only_notifies_when_in_flight():
    """Test that settle is a no-op once a call has finished."""
    state = ClientState()
    listener = Mock()
    state.subscribe(listener)

    state.settle()
    listener.assert_not_called()

    state.begin()
    state.settle()
    assert state.in_flight is False
    assert listener.call_count == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_api_client_publishes_success(api_client, server):
    """Test that a successful call clears in_flight and last_error."""
    server.route("/api/queue", json_response(200, queue_response()))
    seen = []
    api_client.state.subscribe(lambda s: seen.append(s.in_flight))

    await api_client.fetch_queue()

    assert seen == [True, False]
    assert api_client.state.in_flight is False
    assert api_client.state.last_error is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_api_client_publishes_failure(api_client, server):
    """Test that a failed call records last_error."""
    server.route("/api/queue", json_response(500, {"error": "db down"}))

    with pytest.raises(ServerError):
        await api_client.fetch_queue()

    assert api_client.state.in_flight is False
    assert isinstance(api_client.state.last_error, ServerError)
    assert api_client.state.last_error.detail == "db down"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancelled_call_clears_in_flight():
    """Test that cancelling a call abandons it and clears in_flight."""
    started = asyncio.Event()

    async def hang(request):
        started.set()
        await asyncio.sleep(10)
        return json_response(200, queue_response())

    config = ClientConfig(base_url="http://posting.test")
    async with ApiClient(config=config, transport=httpx.MockTransport(hang)) as client:
        task = asyncio.create_task(client.fetch_queue())
        await started.wait()
        assert client.state.in_flight is True

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert client.state.in_flight is False
        assert client.state.last_error is None
