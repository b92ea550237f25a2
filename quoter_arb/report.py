"""
Human-readable per-cycle report.

Builds the text blocks the runner prints: one block per path with implied
rates and signed differences, then the best-path summary.
"""

import re
from typing import List

from .fixed_point import ratio_string
from .types import CycleDecision, PathOutcome, PathSpec, Token


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"

    @staticmethod
    def strip(text: str) -> str:
        """Remove all ANSI codes from text."""
        return re.sub(r"\033\[[0-9;]+m", "", text)


def _paint(text: str, color: str, use_color: bool) -> str:
    return f"{color}{text}{Colors.RESET}" if use_color else text


def format_path(
    outcome: PathOutcome, base: Token, intermediate: Token, use_color: bool = False
) -> List[str]:
    """Lines describing one successfully quoted path."""
    buy_rate = ratio_string(outcome.intermediate, outcome.start)
    sell_rate = ratio_string(outcome.back, outcome.intermediate)
    net_color = Colors.RED if outcome.net.is_negative else Colors.GREEN

    return [
        _paint(f"--- PATH {outcome.path.key}: {outcome.label} ---", Colors.BOLD, use_color),
        f"Start: {outcome.start} {base.symbol}",
        f"{outcome.path.buy_venue} BUY: {outcome.intermediate} {intermediate.symbol} "
        f"(≈ {buy_rate} {intermediate.symbol}/{base.symbol})",
        f"{outcome.path.sell_venue} SELL: {outcome.back} {base.symbol} "
        f"(≈ {sell_rate} {base.symbol}/{intermediate.symbol})",
        f"Gross diff: {outcome.gross} {base.symbol}",
        f"Est. gas (round-trip): {outcome.cost} {base.symbol}",
        _paint(f"Net Profit: {outcome.net} {base.symbol}", net_color, use_color),
    ]


def format_failed_path(path: PathSpec, use_color: bool = False) -> List[str]:
    return [
        _paint(f"--- PATH {path.key}: {path.label} ---", Colors.BOLD, use_color),
        _paint("Quote failed.", Colors.YELLOW, use_color),
    ]


def format_best(
    decision: CycleDecision,
    base: Token,
    intermediate: Token,
    use_color: bool = False,
) -> List[str]:
    """Best-path summary and the opportunity verdict."""
    best = decision.best
    if best is None:
        return [_paint("Both paths failed to quote this round.", Colors.YELLOW, use_color)]

    lines = [
        _paint(f"=== Best Path Selected: {best.label} ===", Colors.CYAN, use_color),
        f"Start: {best.start} {base.symbol} | "
        f"{intermediate.symbol} bought: {best.intermediate} | "
        f"{base.symbol} back: {best.back} | "
        f"Gas: {best.cost} | "
        f"Net: {best.net}",
    ]
    if decision.is_opportunity:
        lines.append(
            _paint(
                f"  🚀 ARB DETECTED ({best.label}): {best.net} {base.symbol}",
                Colors.GREEN,
                use_color,
            )
        )
    else:
        lines.append("No arbitrage (net ≤ threshold).")
    return lines


def format_cycle(
    decision: CycleDecision,
    path_a: PathSpec,
    path_b: PathSpec,
    base: Token,
    intermediate: Token,
    use_color: bool = False,
) -> str:
    """Full report for one cycle, paths first, summary last."""
    blocks: List[List[str]] = []
    for path, outcome in ((path_a, decision.path_a), (path_b, decision.path_b)):
        if outcome is None:
            blocks.append(format_failed_path(path, use_color))
        else:
            blocks.append(format_path(outcome, base, intermediate, use_color))
    blocks.append(format_best(decision, base, intermediate, use_color))

    return "\n\n".join("\n".join(block) for block in blocks)
