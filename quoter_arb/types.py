"""
Core data types for the two-venue quoter arbitrage monitor.
"""

from dataclasses import dataclass
from typing import Optional

from .fixed_point import SignedAmount, TokenAmount


@dataclass(frozen=True)
class Token:
    """
    ERC20 token taking part in the monitored pair.

    Attributes:
        symbol: Display symbol (e.g., "USDC")
        address: Checksummed token address
        decimals: Token decimal places (6 for USDC, 18 for WETH)
    """

    symbol: str
    address: str
    decimals: int

    def amount(self, raw: int) -> TokenAmount:
        """Wrap a raw on-chain integer at this token's scale."""
        return TokenAmount(raw, self.decimals)


@dataclass(frozen=True)
class QuoteResult:
    """
    Output of a single quote request.

    Only amount_out feeds the arbitrage math; the remaining fields are
    diagnostics that some quoters (Uniswap QuoterV2) return.
    """

    amount_out: TokenAmount
    sqrt_price_after: Optional[int] = None
    ticks_crossed: Optional[int] = None
    gas_estimate: Optional[int] = None


@dataclass(frozen=True)
class PathSpec:
    """
    One direction of the round trip: buy on `buy_venue`, sell on `sell_venue`.

    Attributes:
        key: Short identifier ("A" or "B")
        buy_venue: Name of the venue quoting base -> intermediate
        sell_venue: Name of the venue quoting intermediate -> base
    """

    key: str
    buy_venue: str
    sell_venue: str

    @property
    def label(self) -> str:
        return f"{self.buy_venue} BUY → {self.sell_venue} SELL"


@dataclass(frozen=True)
class PathOutcome:
    """
    Result of evaluating one path in one polling cycle.

    Attributes:
        path: Direction that was evaluated
        start: Base asset sent into the buy leg
        intermediate: Intermediate asset the buy leg returned
        back: Base asset the sell leg returned
        cost: Estimated round-trip gas cost in base asset
        gross: back - start
        net: back - start - cost
    """

    path: PathSpec
    start: TokenAmount
    intermediate: TokenAmount
    back: TokenAmount
    cost: TokenAmount
    gross: SignedAmount
    net: SignedAmount

    @property
    def label(self) -> str:
        return self.path.label


@dataclass(frozen=True)
class CycleDecision:
    """
    Decision produced by one polling cycle.

    `best` is None when neither path could be quoted; in that case the
    threshold check is skipped and `is_opportunity` is False.
    """

    path_a: Optional[PathOutcome]
    path_b: Optional[PathOutcome]
    best: Optional[PathOutcome]
    is_opportunity: bool = False
    logged: bool = False

    @property
    def has_decision(self) -> bool:
        return self.best is not None
