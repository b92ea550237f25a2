#!/usr/bin/env python3
"""
Tests for two-leg path evaluation
"""

import logging

import pytest

from quoter_arb.fixed_point import TokenAmount
from quoter_arb.path_evaluator import evaluate_path
from quoter_arb.types import PathSpec

PATH_A = PathSpec("A", "Uni", "Quick")


@pytest.fixture
def start(usdc):
    return TokenAmount.from_decimal("10000", usdc.decimals)


@pytest.fixture
def gas(usdc):
    return TokenAmount.from_decimal("0.04", usdc.decimals)


class TestEvaluatePath:
    """Test suite for evaluate_path"""

    def test_profitable_round_trip(self, usdc, weth, start, gas, make_quoter):
        """10000 USDC -> 3.5 WETH -> 10010.50 USDC with 0.04 gas"""
        buy = make_quoter("Uni", {"USDC": "3.5"})
        sell = make_quoter("Quick", {"WETH": "10010.50"})

        outcome = evaluate_path(PATH_A, buy, sell, usdc, weth, start, gas)

        assert outcome is not None
        assert str(outcome.start) == "10000"
        assert str(outcome.intermediate) == "3.5"
        assert str(outcome.back) == "10010.5"
        assert str(outcome.gross) == "10.5"
        assert str(outcome.net) == "10.46"
        assert outcome.cost == gas
        assert outcome.label == "Uni BUY → Quick SELL"

    def test_sell_leg_uses_buy_output(self, usdc, weth, start, gas, make_quoter):
        buy = make_quoter("Uni", {"USDC": "3.123456789012345678"})
        sell = make_quoter("Quick", {"WETH": "9990"})

        evaluate_path(PATH_A, buy, sell, usdc, weth, start, gas)

        assert buy.calls == [("USDC", "WETH", start)]
        token_in, token_out, amount_in = sell.calls[0]
        assert (token_in, token_out) == ("WETH", "USDC")
        assert amount_in == TokenAmount(3_123_456_789_012_345_678, 18)

    def test_loss_keeps_sign(self, usdc, weth, start, gas, make_quoter):
        buy = make_quoter("Uni", {"USDC": "3.5"})
        sell = make_quoter("Quick", {"WETH": "9990"})

        outcome = evaluate_path(PATH_A, buy, sell, usdc, weth, start, gas)

        assert str(outcome.gross) == "-10"
        assert str(outcome.net) == "-10.04"
        assert outcome.net.is_negative

    def test_buy_failure_skips_sell(
        self, usdc, weth, start, gas, make_quoter, make_quote_error, caplog
    ):
        buy = make_quoter("Uni", {"USDC": make_quote_error("Uni")})
        sell = make_quoter("Quick", {"WETH": "10010.50"})

        with caplog.at_level(logging.WARNING, logger="quoter_arb"):
            outcome = evaluate_path(PATH_A, buy, sell, usdc, weth, start, gas)

        assert outcome is None
        assert sell.calls == []
        assert "Path A buy leg failed on Uni (USDC->WETH)" in caplog.text

    def test_sell_failure_returns_none(
        self, usdc, weth, start, gas, make_quoter, make_quote_error, caplog
    ):
        error = make_quote_error("Quick", "timeout")
        buy = make_quoter("Uni", {"USDC": "3.5"})
        sell = make_quoter("Quick", {"WETH": error})

        with caplog.at_level(logging.WARNING, logger="quoter_arb"):
            outcome = evaluate_path(PATH_A, buy, sell, usdc, weth, start, gas)

        assert outcome is None
        assert error.leg == "sell"
        assert "Path A sell leg failed on Quick (WETH->USDC)" in caplog.text
        assert "timeout" in caplog.text

    def test_unexpected_errors_propagate(self, usdc, weth, start, gas, make_quoter):
        """Only quote failures are absorbed; programming errors surface"""
        buy = make_quoter("Uni", {"USDC": TypeError("bad call")})
        sell = make_quoter("Quick", {"WETH": "1"})

        with pytest.raises(TypeError):
            evaluate_path(PATH_A, buy, sell, usdc, weth, start, gas)
