"""
Polling loop for the two-venue quoter arbitrage monitor.

Connects to the node, builds both quoters and the decision engine, then
runs one cycle every `poll_sec` seconds and prints a report per cycle.
"""

import asyncio
import logging
import time
from typing import Optional

from web3 import Web3

from .adapters import AlgebraQuoter, UniswapV3Quoter
from .config import ArbConfig
from .decision_engine import DecisionEngine
from .exceptions import NetworkError
from .opportunity_log import OpportunityLog
from .report import format_cycle
from .types import CycleDecision
from .utils import format_duration

logger = logging.getLogger(__name__)


class QuoterArbRunner:
    """
    Read-only arbitrage monitor.

    Never submits transactions; only quotes.
    """

    def __init__(
        self,
        config: ArbConfig,
        web3: Optional[Web3] = None,
        engine: Optional[DecisionEngine] = None,
        use_color: bool = False,
    ):
        """
        Args:
            config: Validated ArbConfig instance
            web3: Pre-built Web3 instance (connect() builds one if None)
            engine: Pre-built DecisionEngine (build_engine() builds one if None)
            use_color: If True, colorize the console report
        """
        self.config = config
        self.web3 = web3
        self.engine = engine
        self.use_color = use_color

        self.cycle_count = 0
        self.opportunity_count = 0
        self.failed_streak = 0
        self.started_at: Optional[float] = None

    def connect(self) -> int:
        """
        Connect to the RPC endpoint and run the startup sanity check.

        Returns:
            Latest block number

        Raises:
            NetworkError: If the node cannot be reached
        """
        rpc_url = self.config.rpc_url
        if self.web3 is None:
            logger.info(f"Connecting to RPC: {rpc_url}")
            self.web3 = Web3(
                Web3.HTTPProvider(
                    rpc_url, request_kwargs={"timeout": self.config.quote_timeout_sec}
                )
            )

        try:
            block = self.web3.eth.block_number
        except Exception as e:
            raise NetworkError(
                f"Failed to reach node at {rpc_url}: {e}", endpoint=rpc_url
            ) from e

        print(f"Latest block: {block}")
        return block

    def build_engine(self) -> DecisionEngine:
        """Create both quoters and the decision engine from config."""
        if self.engine is not None:
            return self.engine
        if self.web3 is None:
            raise NetworkError("connect() must be called before build_engine()")

        cfg = self.config
        venue1 = UniswapV3Quoter(
            self.web3, cfg.venue1_quoter, cfg.venue1_fee, name=cfg.venue1_name
        )
        venue2 = AlgebraQuoter(self.web3, cfg.venue2_quoter, name=cfg.venue2_name)
        opportunity_log = OpportunityLog(
            cfg.log_path,
            base_symbol=cfg.base.symbol,
            intermediate_symbol=cfg.intermediate.symbol,
        )

        self.engine = DecisionEngine(
            venue1=venue1,
            venue2=venue2,
            base=cfg.base,
            intermediate=cfg.intermediate,
            start_amount=cfg.start_amount,
            round_trip_cost=cfg.round_trip_gas,
            profit_threshold=cfg.profit_threshold,
            opportunity_log=opportunity_log,
            path_timeout_sec=cfg.path_timeout_sec,
        )
        logger.info(
            f"Monitoring {cfg.base.symbol}/{cfg.intermediate.symbol}: "
            f"{cfg.venue1_name} (fee {cfg.venue1_fee}) vs {cfg.venue2_name}, "
            f"start {cfg.start_amount} {cfg.base.symbol}, "
            f"round-trip gas {cfg.round_trip_gas}, threshold {cfg.profit_threshold}"
        )
        return self.engine

    def _track(self, decision: CycleDecision) -> None:
        self.cycle_count += 1
        if decision.is_opportunity:
            self.opportunity_count += 1

        if decision.has_decision:
            if self.failed_streak > 1:
                logger.info(f"Quotes recovered after {self.failed_streak} failed cycles")
            self.failed_streak = 0
            return

        self.failed_streak += 1
        if self.failed_streak > 1:
            logger.warning(
                f"No quotes for {self.failed_streak} consecutive cycles "
                f"(check RPC connectivity)"
            )

    def report(self, decision: CycleDecision) -> str:
        engine = self.engine
        return format_cycle(
            decision,
            engine.path_a,
            engine.path_b,
            self.config.base,
            self.config.intermediate,
            use_color=self.use_color,
        )

    async def run_once(self) -> CycleDecision:
        """Run a single cycle, print its report and update counters."""
        engine = self.build_engine()
        decision = await engine.run_cycle()
        print("\n" + self.report(decision))
        self._track(decision)
        return decision

    async def run(self) -> None:
        """
        Poll until terminated externally (or once, if configured).

        The interval is fixed; it does not back off on failures.
        """
        self.started_at = time.time()
        try:
            while True:
                await self.run_once()
                if self.config.once:
                    break
                await asyncio.sleep(self.config.poll_sec)
        finally:
            elapsed = time.time() - self.started_at
            logger.info(
                f"Ran {self.cycle_count} cycles in {format_duration(elapsed)}, "
                f"{self.opportunity_count} opportunities"
            )
