# SPDX-License-Identifier: MPL-2.0
"""All-to-all message exchange among the parties of one protocol instance."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Message:
    """Intermediate values published by one party."""
    party_id: int
    values: Tuple[int, ...]


class BroadcastAgent:
    """Collects one message per party per round and fans the batch out.

    A round is delivered once ``party_count`` parties have broadcast into it.
    Only queues subscribed at delivery time receive the batch.
    """

    def __init__(self, party_count: int) -> None:
        if party_count < 1:
            raise ValueError("party_count must be positive")
        self.party_count = party_count
        self.parties: Dict[int, asyncio.Queue] = {}
        self._rounds: Dict[int, List[Message]] = {}
        self._closed: Set[int] = set()

    def subscribe(self, party_id: int, queue: asyncio.Queue) -> None:
        if not 0 <= party_id < self.party_count:
            raise ValueError(f"Unknown party id: {party_id}")
        self.parties[party_id] = queue

    async def broadcast(self, round_id: int, message: Message) -> None:
        if not 0 <= message.party_id < self.party_count:
            raise ValueError(f"Unknown party id: {message.party_id}")
        if round_id in self._closed:
            raise ValueError(f"Round {round_id} has already been delivered")
        pending = self._rounds.setdefault(round_id, [])
        if any(m.party_id == message.party_id for m in pending):
            raise ValueError(f"Party {message.party_id} already broadcast in round {round_id}")
        pending.append(message)

        if len(pending) < self.party_count:
            return

        batch = list(self._rounds.pop(round_id))
        self._closed.add(round_id)
        logger.debug("Delivering round %d to %d subscribers", round_id, len(self.parties))
        for queue in self.parties.values():
            await queue.put(list(batch))
