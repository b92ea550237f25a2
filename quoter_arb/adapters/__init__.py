"""
Quote provider adapters for the supported quoter contracts.
"""

from .algebra import AlgebraQuoter
from .base import QuoteProvider, check_input_amount
from .uniswap_v3 import UniswapV3Quoter

__all__ = ["QuoteProvider", "UniswapV3Quoter", "AlgebraQuoter", "check_input_amount"]
