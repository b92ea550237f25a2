"""
QuickSwap V3 (Algebra) quoter adapter.

Algebra pools have a dynamic fee, so the quoter takes only a price limit
(limitSqrtPrice) besides the token pair and input amount.
"""

import logging

from web3 import Web3

from ..abi import ALGEBRA_QUOTER_ABI
from ..exceptions import QuoteError
from ..fixed_point import TokenAmount
from ..types import QuoteResult, Token
from .base import check_input_amount

logger = logging.getLogger(__name__)


class AlgebraQuoter:
    """Quote provider backed by an Algebra Quoter contract."""

    def __init__(
        self,
        web3: Web3,
        quoter_addr: str,
        name: str = "Quick",
        limit_sqrt_price: int = 0,
    ):
        if not Web3.is_checksum_address(quoter_addr):
            raise ValueError(f"Invalid quoter address: {quoter_addr}")

        self.name = name
        self.limit_sqrt_price = limit_sqrt_price
        self.contract = web3.eth.contract(address=quoter_addr, abi=ALGEBRA_QUOTER_ABI)

    def quote(
        self, token_in: Token, token_out: Token, amount_in: TokenAmount
    ) -> QuoteResult:
        """
        Quote an exact-input single-pool swap.

        Raises:
            QuoteError: If the call reverts or the node request fails
        """
        check_input_amount(token_in, amount_in)

        try:
            amount_out = self.contract.functions.quoteExactInputSingle(
                token_in.address,
                token_out.address,
                amount_in.raw,
                self.limit_sqrt_price,
            ).call()
            # Newer Algebra quoters also return the fee applied
            if isinstance(amount_out, (list, tuple)):
                amount_out = amount_out[0]
            result = QuoteResult(amount_out=token_out.amount(int(amount_out)))
        except Exception as e:
            raise QuoteError(
                f"{self.name} quote error ({token_in.symbol}->{token_out.symbol}): {e}",
                venue=self.name,
                token_in=token_in.symbol,
                token_out=token_out.symbol,
            ) from e

        logger.debug(
            f"{self.name} quote {amount_in} {token_in.symbol} -> "
            f"{result.amount_out} {token_out.symbol}"
        )
        return result
