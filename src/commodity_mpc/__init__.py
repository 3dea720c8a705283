# SPDX-License-Identifier: MPL-2.0
"""Commodity-based secure multi-party computation over additive shares."""

__version__ = "0.1.0"

from .broadcast import BroadcastAgent, Message
from .errors import (
    ConfigError,
    MPCError,
    NotInvertibleError,
    ProtocolStateError,
    ProtocolTimeoutError,
)
from .params import Parameters, ProtocolLimits
from .party import BaseParty, DistributedIntMeanParty, PartialResult
from .protocol import (
    DistributedIntMean,
    IntProtocol,
    ProtocolState,
    ProtocolType,
    create_protocol,
    secure_mean,
)
from .sharing import BeaverTriplet, generate_beaver_triplet, generate_shares, reconstruct

__all__ = [
    "BaseParty",
    "BeaverTriplet",
    "BroadcastAgent",
    "ConfigError",
    "DistributedIntMean",
    "DistributedIntMeanParty",
    "IntProtocol",
    "MPCError",
    "Message",
    "NotInvertibleError",
    "Parameters",
    "PartialResult",
    "ProtocolLimits",
    "ProtocolState",
    "ProtocolStateError",
    "ProtocolTimeoutError",
    "ProtocolType",
    "create_protocol",
    "generate_beaver_triplet",
    "generate_shares",
    "reconstruct",
    "secure_mean",
]
