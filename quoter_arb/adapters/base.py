"""
Quote provider interface shared by all venue adapters.
"""

from typing import Protocol, runtime_checkable

from ..exceptions import AmountError
from ..fixed_point import TokenAmount
from ..types import QuoteResult, Token


@runtime_checkable
class QuoteProvider(Protocol):
    """
    Protocol for a read-only price quoter.

    Implementations normalize their contract's call shape to a single
    exact-input quote and raise QuoteError on any failure.
    """

    name: str

    def quote(
        self, token_in: Token, token_out: Token, amount_in: TokenAmount
    ) -> QuoteResult:
        """Quote how much `token_out` a swap of `amount_in` returns."""
        ...


def check_input_amount(token_in: Token, amount_in: TokenAmount) -> None:
    """Reject an input amount whose scale does not match the input token."""
    if amount_in.decimals != token_in.decimals:
        raise AmountError(
            f"Amount scale {amount_in.decimals} does not match "
            f"{token_in.symbol} decimals {token_in.decimals}"
        )
