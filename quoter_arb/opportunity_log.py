"""
Append-only text log of detected opportunities.

One line per opportunity, human readable, no rotation. The file is opened
per write, so nothing is held open between cycles.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .types import PathOutcome
from .utils import ensure_path_exists, get_current_timestamp, timestamp_to_iso

logger = logging.getLogger(__name__)


class OpportunityLog:
    """Writes opportunity records to a persistent log file."""

    def __init__(
        self,
        path: Union[str, Path],
        base_symbol: str = "USDC",
        intermediate_symbol: str = "WETH",
    ):
        self.path = Path(path)
        self.base_symbol = base_symbol
        self.intermediate_symbol = intermediate_symbol

    def format_entry(self, outcome: PathOutcome, timestamp: Optional[float] = None) -> str:
        """Render one outcome as a single log line (newline included)."""
        if timestamp is None:
            timestamp = get_current_timestamp()

        base = self.base_symbol
        inter = self.intermediate_symbol.lower()
        return (
            f"{timestamp_to_iso(timestamp)} ARB ({outcome.label}): "
            f"net={outcome.net} {base} | "
            f"start={outcome.start} {base} | "
            f"{inter}_bought={outcome.intermediate} | "
            f"{base.lower()}_back={outcome.back} | "
            f"gas={outcome.cost}\n"
        )

    def append(self, outcome: PathOutcome) -> bool:
        """
        Append an opportunity record.

        Returns:
            True if written. A write failure is logged as a warning and
            returns False; it never affects the decision already reported.
        """
        entry = self.format_entry(outcome)
        try:
            ensure_path_exists(self.path, is_file=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(entry)
        except OSError as e:
            logger.warning(f"Failed to write opportunity to {self.path}: {e}")
            return False
        return True
