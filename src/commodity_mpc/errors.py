# SPDX-License-Identifier: MPL-2.0
"""Exceptions raised by the MPC protocols."""
from __future__ import annotations


class MPCError(Exception):
    """Base exception for protocol errors."""
    pass


class ConfigError(MPCError, ValueError):
    """Raised when parameters or inputs are rejected at setup."""
    pass


class ProtocolStateError(MPCError, RuntimeError):
    """Raised when a protocol method is called out of order."""
    pass


class ProtocolTimeoutError(MPCError, TimeoutError):
    """Raised when a party does not reply within the configured bound."""
    pass


class NotInvertibleError(MPCError, ArithmeticError):
    """Raised when a residue has no multiplicative inverse."""
    pass
