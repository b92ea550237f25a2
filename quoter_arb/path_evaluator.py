"""
Two-leg path evaluation.

A path buys the intermediate asset on one venue and sells exactly the
amount received on the other venue. The sell leg never uses an independent
estimate: its input is the buy leg's output.
"""

import logging
from typing import Optional

from .adapters.base import QuoteProvider
from .exceptions import QuoteError
from .fixed_point import TokenAmount, signed_diff
from .types import PathOutcome, PathSpec, Token

logger = logging.getLogger(__name__)


def evaluate_path(
    path: PathSpec,
    buy_quoter: QuoteProvider,
    sell_quoter: QuoteProvider,
    base: Token,
    intermediate: Token,
    start: TokenAmount,
    round_trip_cost: TokenAmount,
) -> Optional[PathOutcome]:
    """
    Quote both legs of a path and compute its signed outcome.

    Args:
        path: Direction being evaluated
        buy_quoter: Venue quoting base -> intermediate
        sell_quoter: Venue quoting intermediate -> base
        base: Base asset (e.g., USDC)
        intermediate: Intermediate asset (e.g., WETH)
        start: Base amount sent into the buy leg
        round_trip_cost: Estimated gas for both legs, in base units

    Returns:
        PathOutcome, or None if either leg failed to quote. Failures are
        logged at warning level and never retried within the cycle.
    """
    try:
        bought = buy_quoter.quote(base, intermediate, start).amount_out
    except QuoteError as e:
        e.leg = "buy"
        logger.warning(
            f"Path {path.key} buy leg failed on {buy_quoter.name} "
            f"({base.symbol}->{intermediate.symbol}): {e}"
        )
        return None

    try:
        back = sell_quoter.quote(intermediate, base, bought).amount_out
    except QuoteError as e:
        e.leg = "sell"
        logger.warning(
            f"Path {path.key} sell leg failed on {sell_quoter.name} "
            f"({intermediate.symbol}->{base.symbol}): {e}"
        )
        return None

    return PathOutcome(
        path=path,
        start=start,
        intermediate=bought,
        back=back,
        cost=round_trip_cost,
        gross=signed_diff(back, start),
        net=signed_diff(back, start, round_trip_cost),
    )
