# SPDX-License-Identifier: MPL-2.0
"""Tests for the broadcast agent."""
import asyncio

import pytest

from commodity_mpc.broadcast import BroadcastAgent, Message


def test_registry_starts_empty():
    agent = BroadcastAgent(3)
    assert agent.parties == {}


@pytest.mark.asyncio
async def test_round_delivered_once_every_party_broadcast():
    agent = BroadcastAgent(2)
    inboxes = {i: asyncio.Queue() for i in range(2)}
    for party_id, queue in inboxes.items():
        agent.subscribe(party_id, queue)

    await agent.broadcast(0, Message(0, (1, 2)))
    assert all(q.empty() for q in inboxes.values())

    await agent.broadcast(0, Message(1, (3, 4)))
    for queue in inboxes.values():
        batch = queue.get_nowait()
        assert batch == [Message(0, (1, 2)), Message(1, (3, 4))]


@pytest.mark.asyncio
async def test_rounds_are_independent():
    agent = BroadcastAgent(2)
    inbox = asyncio.Queue()
    agent.subscribe(0, inbox)

    await agent.broadcast(0, Message(0, (1,)))
    await agent.broadcast(1, Message(0, (2,)))
    await agent.broadcast(1, Message(1, (3,)))
    assert inbox.get_nowait() == [Message(0, (2,)), Message(1, (3,))]
    assert inbox.empty()


@pytest.mark.asyncio
async def test_duplicate_and_late_messages_rejected():
    agent = BroadcastAgent(2)
    await agent.broadcast(0, Message(0, (1,)))
    with pytest.raises(ValueError):
        await agent.broadcast(0, Message(0, (9,)))

    await agent.broadcast(0, Message(1, (2,)))
    with pytest.raises(ValueError):
        await agent.broadcast(0, Message(1, (2,)))


@pytest.mark.asyncio
async def test_late_subscriber_misses_delivered_round():
    agent = BroadcastAgent(1)
    early, late = asyncio.Queue(), asyncio.Queue()
    agent.subscribe(0, early)
    await agent.broadcast(0, Message(0, (7,)))
    agent.subscribe(0, late)

    assert early.get_nowait() == [Message(0, (7,))]
    assert late.empty()


@pytest.mark.asyncio
async def test_subscribe_unknown_party():
    agent = BroadcastAgent(2)
    with pytest.raises(ValueError):
        agent.subscribe(2, asyncio.Queue())


@pytest.mark.asyncio
async def test_broadcast_from_unknown_party_rejected():
    agent = BroadcastAgent(2)
    inbox = asyncio.Queue()
    agent.subscribe(0, inbox)

    await agent.broadcast(0, Message(0, (1,)))
    with pytest.raises(ValueError):
        await agent.broadcast(0, Message(99, (2,)))
    with pytest.raises(ValueError):
        await agent.broadcast(0, Message(-1, (2,)))
    assert inbox.empty()

    await agent.broadcast(0, Message(1, (3,)))
    assert inbox.get_nowait() == [Message(0, (1,)), Message(1, (3,))]
