"""
Uniswap V3 QuoterV2 adapter.

QuoterV2 takes a QuoteExactInputSingleParams struct (tokenIn, tokenOut,
amountIn, fee, sqrtPriceLimitX96) and returns the output amount together with
the post-swap sqrt price, initialized ticks crossed and a gas estimate.
"""

import logging

from web3 import Web3

from ..abi import UNISWAP_QUOTER_V2_ABI
from ..exceptions import QuoteError
from ..fixed_point import TokenAmount
from ..types import QuoteResult, Token
from .base import check_input_amount

logger = logging.getLogger(__name__)

UINT24_MAX = 2**24 - 1


class UniswapV3Quoter:
    """Quote provider backed by a Uniswap V3 QuoterV2 contract."""

    def __init__(
        self,
        web3: Web3,
        quoter_addr: str,
        fee: int,
        name: str = "Uni",
        sqrt_price_limit_x96: int = 0,
    ):
        """
        Args:
            web3: Web3 instance connected to the chain
            quoter_addr: Checksummed address of the QuoterV2 contract
            fee: Pool fee tier passed to every quote (e.g., 500 for 0.05%)
            name: Short venue label used in reports and logs
            sqrt_price_limit_x96: Price limit, 0 for none

        Raises:
            ValueError: If the address or fee tier is invalid
        """
        if not Web3.is_checksum_address(quoter_addr):
            raise ValueError(f"Invalid quoter address: {quoter_addr}")
        if not 0 <= fee <= UINT24_MAX:
            raise ValueError(f"Fee tier must fit in uint24: {fee}")

        self.name = name
        self.fee = fee
        self.sqrt_price_limit_x96 = sqrt_price_limit_x96
        self.contract = web3.eth.contract(address=quoter_addr, abi=UNISWAP_QUOTER_V2_ABI)

    def quote(
        self, token_in: Token, token_out: Token, amount_in: TokenAmount
    ) -> QuoteResult:
        """
        Quote an exact-input single-pool swap.

        Raises:
            QuoteError: If the call reverts or the node request fails
        """
        check_input_amount(token_in, amount_in)

        params = (
            token_in.address,
            token_out.address,
            amount_in.raw,
            self.fee,
            self.sqrt_price_limit_x96,
        )
        try:
            amount_out, sqrt_after, ticks, gas = (
                self.contract.functions.quoteExactInputSingle(params).call()
            )
            result = QuoteResult(
                amount_out=token_out.amount(int(amount_out)),
                sqrt_price_after=int(sqrt_after),
                ticks_crossed=int(ticks),
                gas_estimate=int(gas),
            )
        except Exception as e:
            raise QuoteError(
                f"{self.name} quote error ({token_in.symbol}->{token_out.symbol}): {e}",
                venue=self.name,
                token_in=token_in.symbol,
                token_out=token_out.symbol,
            ) from e

        logger.debug(
            f"{self.name} quote {amount_in} {token_in.symbol} -> "
            f"{result.amount_out} {token_out.symbol} (gas est {result.gas_estimate})"
        )
        return result
