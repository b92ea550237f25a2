"""Shared fixtures: tokens and scripted quote providers."""

import pytest
from web3 import Web3

from quoter_arb.exceptions import QuoteError
from quoter_arb.fixed_point import TokenAmount
from quoter_arb.types import QuoteResult, Token

USDC = Token("USDC", Web3.to_checksum_address("0x" + "11" * 20), 6)
WETH = Token("WETH", Web3.to_checksum_address("0x" + "22" * 20), 18)


class FakeQuoter:
    """
    Scripted quote provider.

    `outputs` maps the input token symbol to either a human decimal string
    (converted at the output token's scale) or an exception to raise.
    """

    def __init__(self, name, outputs):
        self.name = name
        self.outputs = dict(outputs)
        self.calls = []

    def quote(self, token_in, token_out, amount_in):
        self.calls.append((token_in.symbol, token_out.symbol, amount_in))
        out = self.outputs[token_in.symbol]
        if isinstance(out, Exception):
            raise out
        return QuoteResult(amount_out=TokenAmount.from_decimal(out, token_out.decimals))


def quote_error(venue, message="execution reverted"):
    return QuoteError(f"{venue} quote error: {message}", venue=venue)


@pytest.fixture
def usdc():
    return USDC


@pytest.fixture
def weth():
    return WETH


@pytest.fixture
def make_quoter():
    return FakeQuoter


@pytest.fixture
def make_quote_error():
    return quote_error
