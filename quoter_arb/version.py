"""Version information for the quoter arbitrage monitor."""

__version__ = "0.1.0"
