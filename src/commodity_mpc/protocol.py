# SPDX-License-Identifier: MPL-2.0
"""Orchestration of secret-shared protocols over integer inputs."""
from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Sequence, Type, Union

from .broadcast import BroadcastAgent
from .errors import ConfigError, ProtocolStateError, ProtocolTimeoutError
from .params import Parameters, ProtocolLimits
from .party import BaseParty, DistributedIntMeanParty, PartialResult
from .sharing import generate_shares, reconstruct

logger = logging.getLogger(__name__)


class ProtocolState(str, Enum):
    """Lifecycle of a single protocol instance."""

    UNINITIALIZED = "uninitialized"
    CONFIGURED = "configured"
    COMPLETED = "completed"
    FAILED = "failed"


class ProtocolType(str, Enum):
    """Protocols available through :func:`create_protocol`."""

    MEAN = "mean"


class IntProtocol(ABC):
    """A secret-sharing protocol computing an integer from integer inputs."""

    @abstractmethod
    async def setup(self, params: Parameters, parcels: Sequence[int]) -> None:
        """Validate inputs, share them and start the parties."""

    @abstractmethod
    async def run(self) -> None:
        """Execute the protocol round."""

    @abstractmethod
    def output(self) -> int:
        """Return the result of a completed run."""


class DistributedIntMean(IntProtocol):
    """Integer mean of the client's parcels, computed on additive shares.

    Each party receives one share of every parcel, adds them up and divides
    the sum by the number of parcels. The orchestrator recombines the
    quotients and remainders into the floor of the mean.
    """

    def __init__(
        self,
        limits: Optional[ProtocolLimits] = None,
        party_cls: Type[BaseParty] = DistributedIntMeanParty,
    ) -> None:
        self.limits = limits or ProtocolLimits()
        self.party_cls = party_cls
        self.state = ProtocolState.UNINITIALIZED
        self.params: Optional[Parameters] = None
        self.parcels: List[int] = []
        self.broadcast_agent: Optional[BroadcastAgent] = None
        self.timings: Dict[str, float] = {}
        self._shares: List[List[int]] = []
        self._inboxes: List[asyncio.Queue] = []
        self._tasks: List[asyncio.Task] = []
        self._result: Optional[int] = None

    async def __aenter__(self) -> "DistributedIntMean":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Stop any party still waiting for shares."""
        if any(not task.done() for task in self._tasks):
            await self._stop_parties()
            if self.state is ProtocolState.CONFIGURED:
                self.state = ProtocolState.FAILED

    async def setup(self, params: Parameters, parcels: Sequence[int]) -> None:
        if self.state is not ProtocolState.UNINITIALIZED:
            raise ProtocolStateError(f"setup() called on a {self.state.value} protocol")
        start = time.perf_counter()

        params.validate_for_protocol()
        parcels = list(parcels)
        for p in parcels:
            if isinstance(p, bool) or not isinstance(p, int):
                raise ConfigError(f"Parcels must be integers, got {type(p).__name__}")
        if not parcels:
            raise ConfigError("At least one parcel is required in order to compute a mean")
        bound = 2 * sum(abs(p) for p in parcels)
        if params.modulus <= bound:
            raise ConfigError("Modulus is too small for the sum of the parcels to be recoverable")

        self.params = params
        self.parcels = parcels
        self._shares = [generate_shares(p, params.party_count, params.modulus) for p in parcels]
        self.broadcast_agent = BroadcastAgent(params.party_count)

        for party_id in range(params.party_count):
            inbox: asyncio.Queue = asyncio.Queue(maxsize=1)
            party = self.party_cls(party_id, params, inbox, self.broadcast_agent)
            self._inboxes.append(inbox)
            self._tasks.append(asyncio.create_task(party.run(), name=f"mpc-party-{party_id}"))

        self.state = ProtocolState.CONFIGURED
        self.timings["setup"] = time.perf_counter() - start
        logger.info(
            "Mean protocol configured with %d parties and %d parcels",
            params.party_count,
            len(parcels),
        )

    async def run(self) -> None:
        if self.state is not ProtocolState.CONFIGURED:
            raise ProtocolStateError(f"run() called on a {self.state.value} protocol")
        assert self.params is not None
        start = time.perf_counter()

        for party_id, inbox in enumerate(self._inboxes):
            inbox.put_nowait([row[party_id] for row in self._shares])
        self._shares = []
        logger.debug("Shares sent to %d parties", len(self._inboxes))

        try:
            replies = await asyncio.wait_for(
                asyncio.gather(*self._tasks), timeout=self.limits.timeout_seconds
            )
        except asyncio.TimeoutError:
            self.state = ProtocolState.FAILED
            await self._stop_parties()
            logger.warning("Parties did not reply within %.2f seconds", self.limits.timeout_seconds)
            raise ProtocolTimeoutError(
                f"Not every party replied within {self.limits.timeout_seconds} seconds"
            ) from None
        except asyncio.CancelledError:
            self.state = ProtocolState.FAILED
            for task in self._tasks:
                task.cancel()
            logger.warning("Mean protocol run was cancelled")
            raise
        except Exception:
            self.state = ProtocolState.FAILED
            await self._stop_parties()
            logger.exception("A protocol party failed")
            raise

        self._result = self._reconstruct(replies)
        self.state = ProtocolState.COMPLETED
        self.timings["run"] = time.perf_counter() - start
        logger.info("Mean protocol completed in %.4f seconds", self.timings["run"])

    def output(self) -> int:
        if self.state is not ProtocolState.COMPLETED or self._result is None:
            raise ProtocolStateError("output() is only available after a successful run()")
        return self._result

    def _reconstruct(self, replies: Sequence[PartialResult]) -> int:
        assert self.params is not None
        if len({r.party_id for r in replies}) != self.params.party_count:
            raise ProtocolStateError("Reconstruction requires one reply from every party")

        modulus = self.params.modulus
        count = len(self.parcels)
        # count * q_i + r_i is party i's share of the parcel sum
        total = reconstruct((count * r.quotient + r.remainder for r in replies), modulus)
        if total > modulus // 2:
            total -= modulus
        return total // count

    async def _stop_parties(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)


def create_protocol(
    protocol_type: Union[str, ProtocolType],
    limits: Optional[ProtocolLimits] = None,
) -> IntProtocol:
    """Factory that constructs a protocol instance by type."""

    if isinstance(protocol_type, str):
        protocol_type = ProtocolType(protocol_type.lower())

    mapping: Dict[ProtocolType, Type[DistributedIntMean]] = {
        ProtocolType.MEAN: DistributedIntMean,
    }

    protocol_cls = mapping.get(protocol_type)
    if protocol_cls is None:
        raise ValueError(f"Unknown protocol type: {protocol_type}")
    return protocol_cls(limits=limits)


async def secure_mean(
    parcels: Sequence[int],
    params: Parameters,
    limits: Optional[ProtocolLimits] = None,
) -> int:
    """Run a fresh mean protocol instance end to end and return its output."""
    protocol = DistributedIntMean(limits=limits)
    await protocol.setup(params, parcels)
    await protocol.run()
    return protocol.output()
