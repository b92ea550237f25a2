"""
Decision Engine for two-venue quoter arbitrage.

Runs both round-trip directions, keeps the better one and classifies it
against the profit threshold.
"""

import asyncio
import logging
from typing import Optional, Tuple

from .adapters.base import QuoteProvider
from .exceptions import AmountError
from .fixed_point import TokenAmount
from .opportunity_log import OpportunityLog
from .path_evaluator import evaluate_path
from .types import CycleDecision, PathOutcome, PathSpec, Token

logger = logging.getLogger(__name__)


class DecisionEngine:
    """
    Per-cycle orchestration of both paths.

    Responsibilities:
    1. Evaluate Path A (venue1 buy -> venue2 sell) and Path B (venue2 buy ->
       venue1 sell) with the same starting amount, independently
    2. Select the outcome with the strictly greater net difference (ties go
       to Path A); a lone successful path is selected automatically
    3. Flag an opportunity only when net strictly exceeds the threshold
    4. Append opportunities to the persistent log

    All collaborators are passed in, so tests can use fake quoters.
    """

    def __init__(
        self,
        venue1: QuoteProvider,
        venue2: QuoteProvider,
        base: Token,
        intermediate: Token,
        start_amount: TokenAmount,
        round_trip_cost: TokenAmount,
        profit_threshold: TokenAmount,
        opportunity_log: Optional[OpportunityLog] = None,
        path_timeout_sec: Optional[float] = None,
    ):
        """
        Args:
            venue1: First venue (buy leg of Path A)
            venue2: Second venue (buy leg of Path B)
            base: Base asset the round trip starts and ends in
            intermediate: Asset bought on the first leg
            start_amount: Base amount used for both paths
            round_trip_cost: Gas estimate for both legs, in base units
            profit_threshold: Net difference that must be strictly exceeded
            opportunity_log: Where opportunities are appended (optional)
            path_timeout_sec: Abandon a path that takes longer than this

        Raises:
            AmountError: If an amount is not at the base asset's scale
        """
        for label, amount in (
            ("start_amount", start_amount),
            ("round_trip_cost", round_trip_cost),
            ("profit_threshold", profit_threshold),
        ):
            if amount.decimals != base.decimals:
                raise AmountError(
                    f"{label} has {amount.decimals} decimals, "
                    f"{base.symbol} uses {base.decimals}"
                )

        self.venue1 = venue1
        self.venue2 = venue2
        self.base = base
        self.intermediate = intermediate
        self.start_amount = start_amount
        self.round_trip_cost = round_trip_cost
        self.profit_threshold = profit_threshold
        self.opportunity_log = opportunity_log
        self.path_timeout_sec = path_timeout_sec

        self.path_a = PathSpec("A", venue1.name, venue2.name)
        self.path_b = PathSpec("B", venue2.name, venue1.name)

    # ------------------------------------------------------------------
    # Path evaluation
    # ------------------------------------------------------------------

    def evaluate_path_a(self) -> Optional[PathOutcome]:
        return evaluate_path(
            self.path_a,
            self.venue1,
            self.venue2,
            self.base,
            self.intermediate,
            self.start_amount,
            self.round_trip_cost,
        )

    def evaluate_path_b(self) -> Optional[PathOutcome]:
        return evaluate_path(
            self.path_b,
            self.venue2,
            self.venue1,
            self.base,
            self.intermediate,
            self.start_amount,
            self.round_trip_cost,
        )

    async def _run_path(self, path: PathSpec, evaluate) -> Optional[PathOutcome]:
        """
        Run a blocking path evaluation in the thread pool, with a timeout.

        A timeout or an error outside the QuoteError contract marks the path
        as failed for this cycle; the other path is unaffected.
        """
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(None, evaluate)
        try:
            return await asyncio.wait_for(future, timeout=self.path_timeout_sec)
        except asyncio.TimeoutError:
            logger.warning(
                f"Path {path.key} ({path.label}) timed out after {self.path_timeout_sec}s"
            )
            return None
        except Exception as e:
            logger.error(
                f"Path {path.key} ({path.label}) failed with unexpected error: {e}",
                exc_info=True,
            )
            return None

    async def evaluate_paths(
        self,
    ) -> Tuple[Optional[PathOutcome], Optional[PathOutcome]]:
        """Evaluate both paths concurrently; a failure in one never blocks the other."""
        outcome_a, outcome_b = await asyncio.gather(
            self._run_path(self.path_a, self.evaluate_path_a),
            self._run_path(self.path_b, self.evaluate_path_b),
        )
        return outcome_a, outcome_b

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------

    @staticmethod
    def select_best(
        outcome_a: Optional[PathOutcome], outcome_b: Optional[PathOutcome]
    ) -> Optional[PathOutcome]:
        """Pick the higher net outcome; Path A wins ties."""
        if outcome_a is None:
            return outcome_b
        if outcome_b is None:
            return outcome_a
        if outcome_b.net > outcome_a.net:
            return outcome_b
        return outcome_a

    def is_opportunity(self, outcome: PathOutcome) -> bool:
        """Net must be strictly greater than the threshold; equal is not enough."""
        return outcome.net.exceeds(self.profit_threshold)

    def decide(
        self, outcome_a: Optional[PathOutcome], outcome_b: Optional[PathOutcome]
    ) -> CycleDecision:
        """Build the cycle decision and log the opportunity, if any."""
        best = self.select_best(outcome_a, outcome_b)

        if best is None:
            logger.warning("Both paths failed to quote this round")
            return CycleDecision(path_a=outcome_a, path_b=outcome_b, best=None)

        if not self.is_opportunity(best):
            logger.debug(
                f"No arbitrage: best {best.label} net {best.net} "
                f"<= threshold {self.profit_threshold} {self.base.symbol}"
            )
            return CycleDecision(path_a=outcome_a, path_b=outcome_b, best=best)

        logger.info(f"ARB DETECTED ({best.label}): {best.net} {self.base.symbol}")
        logged = False
        if self.opportunity_log is not None:
            logged = self.opportunity_log.append(best)

        return CycleDecision(
            path_a=outcome_a,
            path_b=outcome_b,
            best=best,
            is_opportunity=True,
            logged=logged,
        )

    async def run_cycle(self) -> CycleDecision:
        """Evaluate both paths and decide; one polling cycle."""
        outcome_a, outcome_b = await self.evaluate_paths()
        return self.decide(outcome_a, outcome_b)
