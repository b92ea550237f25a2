"""
Exception hierarchy for the quoter arbitrage monitor.

Provides specific exception types for the different failure categories so
callers can tell a fatal startup problem from a recoverable quote failure.
"""

from typing import Any, Dict, Optional


class QuoterArbError(Exception):
    """Base exception for all quoter arbitrage related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(QuoterArbError):
    """Raised when there are configuration-related issues."""

    pass


class AmountError(QuoterArbError, ValueError):
    """Raised when a fixed-point amount is negative, too wide, or mixes scales."""

    pass


class QuoteError(QuoterArbError):
    """Raised when a single quote request against a venue fails."""

    def __init__(
        self,
        message: str,
        venue: Optional[str] = None,
        leg: Optional[str] = None,
        token_in: Optional[str] = None,
        token_out: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.venue = venue
        self.leg = leg
        self.token_in = token_in
        self.token_out = token_out


class NetworkError(QuoterArbError):
    """Raised when the node cannot be reached."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
