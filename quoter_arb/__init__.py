"""
Two-venue DEX quoter arbitrage monitor.

Quotes the same token pair on two decentralized exchanges, evaluates both
round-trip directions with exact fixed-point arithmetic and reports when the
net result after estimated gas exceeds a threshold. Read-only: it never
submits transactions.
"""

from quoter_arb.version import __version__

PROJECT_NAME = "quoter-arb"
VERSION = __version__

from quoter_arb.decision_engine import DecisionEngine
from quoter_arb.fixed_point import (
    SignedAmount,
    TokenAmount,
    from_units,
    ratio_string,
    signed_diff,
    to_units,
)
from quoter_arb.types import CycleDecision, PathOutcome, PathSpec, QuoteResult, Token

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "DecisionEngine",
    "TokenAmount",
    "SignedAmount",
    "to_units",
    "from_units",
    "signed_diff",
    "ratio_string",
    "Token",
    "QuoteResult",
    "PathSpec",
    "PathOutcome",
    "CycleDecision",
]
