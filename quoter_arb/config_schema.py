"""
Configuration schema validation using Pydantic
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from web3 import Web3

from .adapters.uniswap_v3 import UINT24_MAX


def _checksum(v: str) -> str:
    if not isinstance(v, str) or not Web3.is_address(v):
        raise ValueError(f"Invalid address: {v!r}")
    return Web3.to_checksum_address(v)


class TokenSettings(BaseModel):
    """Token taking part in the monitored pair"""

    symbol: str = Field(min_length=1, description="Display symbol")
    address: str = Field(description="Token contract address")
    decimals: int = Field(ge=0, le=77, description="Token decimal places")

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        return _checksum(v)

    model_config = {"extra": "forbid"}


class UniswapV3VenueSettings(BaseModel):
    """Venue 1: Uniswap v3 QuoterV2"""

    name: str = Field(default="Uni", min_length=1)
    quoter: str = Field(description="QuoterV2 contract address")
    fee: int = Field(ge=0, le=UINT24_MAX, description="Pool fee tier (uint24)")

    @field_validator("quoter")
    @classmethod
    def validate_quoter(cls, v):
        return _checksum(v)

    model_config = {"extra": "forbid"}


class AlgebraVenueSettings(BaseModel):
    """Venue 2: QuickSwap v3 (Algebra) Quoter"""

    name: str = Field(default="Quick", min_length=1)
    quoter: str = Field(description="Algebra Quoter contract address")

    @field_validator("quoter")
    @classmethod
    def validate_quoter(cls, v):
        return _checksum(v)

    model_config = {"extra": "forbid"}


class ArbSettings(BaseModel):
    """Complete monitor configuration"""

    rpc_url: str = Field(min_length=1, description="HTTP(S) RPC endpoint")
    base_token: TokenSettings
    intermediate_token: TokenSettings
    venue1: UniswapV3VenueSettings
    venue2: AlgebraVenueSettings

    start_amount: Decimal = Field(default=Decimal("10000"), ge=0)
    gas_per_tx: Decimal = Field(default=Decimal("0.02"), ge=0)
    profit_threshold: Decimal = Field(default=Decimal("0.1"), ge=0)

    poll_sec: float = Field(default=5.0, gt=0, le=3600)
    quote_timeout_sec: float = Field(default=10.0, gt=0, le=600)
    log_path: str = Field(default="profit.txt", min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    once: bool = False

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, v):
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid RPC URL format: {v}")
        return v

    @field_validator("start_amount", "gas_per_tx", "profit_threshold", mode="before")
    @classmethod
    def parse_decimal(cls, v):
        # YAML floats go through repr so 0.1 stays 0.1
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_distinct(self):
        if self.base_token.address == self.intermediate_token.address:
            raise ValueError("base_token and intermediate_token must differ")
        if self.venue1.name == self.venue2.name:
            raise ValueError("venue1 and venue2 must have different names")
        return self

    model_config = {"extra": "forbid"}


def validate_settings(config_dict: dict) -> ArbSettings:
    """
    Validate a configuration dictionary

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    return ArbSettings(**config_dict)
