"""
Configuration loading for the quoter arbitrage monitor.

Settings come from an optional YAML file, overridden by environment variables
(a `.env` file is loaded first via python-dotenv). The result is validated
against the pydantic schema and frozen into an ArbConfig, the only place
where human decimal values are converted to fixed-point amounts.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from .config_schema import ArbSettings, validate_settings
from .exceptions import AmountError, ConfigurationError
from .fixed_point import TokenAmount
from .types import Token
from .utils import deep_merge, set_nested_value


class ConfigError(ConfigurationError):
    """Raised when config is invalid or missing required fields."""

    pass


# Environment variable -> dotted settings key. Earlier names win over aliases.
ENV_VARS = (
    ("POLYGON_RPC_URL", "rpc_url"),
    ("RPC_URL", "rpc_url"),
    ("USDC", "base_token.address"),
    ("BASE_SYMBOL", "base_token.symbol"),
    ("BASE_DECIMALS", "base_token.decimals"),
    ("WETH", "intermediate_token.address"),
    ("INTERMEDIATE_SYMBOL", "intermediate_token.symbol"),
    ("INTERMEDIATE_DECIMALS", "intermediate_token.decimals"),
    ("UNISWAP_QUOTER", "venue1.quoter"),
    ("UNIV3_FEE", "venue1.fee"),
    ("VENUE1_NAME", "venue1.name"),
    ("QUICKSWAP_QUOTER", "venue2.quoter"),
    ("VENUE2_NAME", "venue2.name"),
    ("START_USDC", "start_amount"),
    ("GAS_USDC_PER_TX", "gas_per_tx"),
    ("PROFIT_THRESHOLD", "profit_threshold"),
    ("POLL_SEC", "poll_sec"),
    ("QUOTE_TIMEOUT_SEC", "quote_timeout_sec"),
    ("PROFIT_LOG", "log_path"),
    ("LOG_LEVEL", "log_level"),
)

DEFAULT_TOKENS = {
    "base_token": {"symbol": "USDC", "decimals": 6},
    "intermediate_token": {"symbol": "WETH", "decimals": 18},
}


@dataclass(frozen=True)
class ArbConfig:
    """
    Immutable runtime configuration, read once at startup.

    Attributes:
        rpc_url: HTTP(S) RPC endpoint
        base: Base asset (e.g., USDC, 6 decimals)
        intermediate: Intermediate asset (e.g., WETH, 18 decimals)
        venue1_name / venue1_quoter / venue1_fee: Uniswap v3 QuoterV2 venue
        venue2_name / venue2_quoter: Algebra quoter venue
        start_amount: Base amount used for both paths
        gas_per_tx: Per-transaction gas estimate in base units
        profit_threshold: Net difference that must be strictly exceeded
        poll_sec: Seconds between cycles
        quote_timeout_sec: HTTP timeout per quote request
        log_path: Append-only opportunity log
        log_level: Logging level name
        once: If True, run a single cycle and exit
    """

    rpc_url: str
    base: Token
    intermediate: Token
    venue1_name: str
    venue1_quoter: str
    venue1_fee: int
    venue2_name: str
    venue2_quoter: str
    start_amount: TokenAmount
    gas_per_tx: TokenAmount
    profit_threshold: TokenAmount
    poll_sec: float = 5.0
    quote_timeout_sec: float = 10.0
    log_path: str = "profit.txt"
    log_level: str = "INFO"
    once: bool = False

    @property
    def round_trip_gas(self) -> TokenAmount:
        """Gas for both legs (two transactions; approvals excluded)."""
        return self.gas_per_tx.times(2)

    @property
    def path_timeout_sec(self) -> float:
        """Upper bound for one path: two sequential quote requests."""
        return self.quote_timeout_sec * 2

    @classmethod
    def from_settings(cls, settings: ArbSettings) -> "ArbConfig":
        base = Token(
            symbol=settings.base_token.symbol,
            address=settings.base_token.address,
            decimals=settings.base_token.decimals,
        )
        intermediate = Token(
            symbol=settings.intermediate_token.symbol,
            address=settings.intermediate_token.address,
            decimals=settings.intermediate_token.decimals,
        )
        return cls(
            rpc_url=settings.rpc_url,
            base=base,
            intermediate=intermediate,
            venue1_name=settings.venue1.name,
            venue1_quoter=settings.venue1.quoter,
            venue1_fee=settings.venue1.fee,
            venue2_name=settings.venue2.name,
            venue2_quoter=settings.venue2.quoter,
            start_amount=TokenAmount.from_decimal(settings.start_amount, base.decimals),
            gas_per_tx=TokenAmount.from_decimal(settings.gas_per_tx, base.decimals),
            profit_threshold=TokenAmount.from_decimal(
                settings.profit_threshold, base.decimals
            ),
            poll_sec=settings.poll_sec,
            quote_timeout_sec=settings.quote_timeout_sec,
            log_path=settings.log_path,
            log_level=settings.log_level,
            once=settings.once,
        )


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load and parse YAML configuration file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}") from e

    if config_dict is None:
        return {}
    if not isinstance(config_dict, dict):
        raise ConfigError("Config file must contain a YAML dictionary")

    return config_dict


def settings_from_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect settings from environment variables into a nested dict."""
    settings: Dict[str, Any] = {}
    seen = set()
    for env_name, key_path in ENV_VARS:
        value = environ.get(env_name)
        if value is None or not value.strip() or key_path in seen:
            continue
        set_nested_value(settings, key_path, value.strip())
        seen.add(key_path)
    return settings


def _format_validation_error(e: ValidationError) -> str:
    problems = []
    for err in e.errors():
        location = ".".join(str(part) for part in err["loc"]) or "config"
        problems.append(f"{location}: {err['msg']}")
    return "; ".join(problems)


def build_config(config_dict: Dict[str, Any]) -> ArbConfig:
    """
    Validate a settings dictionary and freeze it into an ArbConfig.

    Raises:
        ConfigError: If required fields are missing or invalid
    """
    config_dict = deep_merge(DEFAULT_TOKENS, config_dict)

    try:
        settings = validate_settings(config_dict)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_format_validation_error(e)}") from e

    try:
        return ArbConfig.from_settings(settings)
    except AmountError as e:
        raise ConfigError(f"Invalid amount in configuration: {e}") from e


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    use_dotenv: bool = True,
) -> ArbConfig:
    """
    Load configuration from YAML (optional) and the environment.

    Args:
        config_path: Path to a YAML config file, or None for env-only
        environ: Environment mapping (defaults to os.environ)
        use_dotenv: If True, load a .env file into os.environ first

    Returns:
        Validated ArbConfig instance

    Raises:
        ConfigError: If config invalid or file not found
    """
    if use_dotenv:
        load_dotenv()
    if environ is None:
        environ = os.environ

    config_dict: Dict[str, Any] = {}
    if config_path is not None:
        config_dict = load_yaml_config(config_path)

    config_dict = deep_merge(config_dict, settings_from_env(environ))
    return build_config(config_dict)
