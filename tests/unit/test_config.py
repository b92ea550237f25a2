"""
Unit tests for quoter_arb/config.py and config_schema.py

Verifies YAML + environment loading, defaults, validation and the
fixed-point conversion of decimal settings.
"""

import unittest

import pytest
import yaml
from web3 import Web3

from quoter_arb.adapters.uniswap_v3 import UINT24_MAX
from quoter_arb.config import (
    ArbConfig,
    ConfigError,
    build_config,
    load_config,
    settings_from_env,
)
from quoter_arb.fixed_point import TokenAmount

USDC_ADDR = "0x" + "11" * 20
WETH_ADDR = "0x" + "22" * 20
UNI_QUOTER = "0x" + "aa" * 20
QUICK_QUOTER = "0x" + "bb" * 20


def base_env():
    return {
        "POLYGON_RPC_URL": "https://polygon.example",
        "USDC": USDC_ADDR,
        "WETH": WETH_ADDR,
        "UNISWAP_QUOTER": UNI_QUOTER,
        "QUICKSWAP_QUOTER": QUICK_QUOTER,
        "UNIV3_FEE": "500",
    }


def base_dict():
    return {
        "rpc_url": "https://polygon.example",
        "base_token": {"address": USDC_ADDR},
        "intermediate_token": {"address": WETH_ADDR},
        "venue1": {"quoter": UNI_QUOTER, "fee": 500},
        "venue2": {"quoter": QUICK_QUOTER},
    }


class TestEnvironmentLoading(unittest.TestCase):
    """Settings taken from environment variables only."""

    def test_defaults_applied(self):
        config = load_config(environ=base_env(), use_dotenv=False)

        self.assertIsInstance(config, ArbConfig)
        self.assertEqual(config.base.symbol, "USDC")
        self.assertEqual(config.base.decimals, 6)
        self.assertEqual(config.intermediate.symbol, "WETH")
        self.assertEqual(config.intermediate.decimals, 18)
        self.assertEqual(config.start_amount, TokenAmount(10_000_000_000, 6))
        self.assertEqual(config.gas_per_tx, TokenAmount(20_000, 6))
        self.assertEqual(config.profit_threshold, TokenAmount(100_000, 6))
        self.assertEqual(config.poll_sec, 5.0)
        self.assertEqual(config.quote_timeout_sec, 10.0)
        self.assertEqual(config.log_path, "profit.txt")
        self.assertEqual(config.venue1_name, "Uni")
        self.assertEqual(config.venue2_name, "Quick")
        self.assertFalse(config.once)

    def test_addresses_are_checksummed(self):
        config = load_config(environ=base_env(), use_dotenv=False)

        self.assertEqual(config.base.address, Web3.to_checksum_address(USDC_ADDR))
        self.assertEqual(config.venue1_quoter, Web3.to_checksum_address(UNI_QUOTER))
        self.assertEqual(config.venue2_quoter, Web3.to_checksum_address(QUICK_QUOTER))

    def test_env_amounts_parsed(self):
        env = base_env()
        env.update(
            {"START_USDC": "2500.5", "GAS_USDC_PER_TX": "0.035", "PROFIT_THRESHOLD": "1"}
        )
        config = load_config(environ=env, use_dotenv=False)

        self.assertEqual(str(config.start_amount), "2500.5")
        self.assertEqual(str(config.gas_per_tx), "0.035")
        self.assertEqual(str(config.round_trip_gas), "0.07")
        self.assertEqual(str(config.profit_threshold), "1")

    def test_rpc_url_alias(self):
        env = base_env()
        del env["POLYGON_RPC_URL"]
        env["RPC_URL"] = "https://fallback.example"
        config = load_config(environ=env, use_dotenv=False)
        self.assertEqual(config.rpc_url, "https://fallback.example")

    def test_primary_env_name_wins_over_alias(self):
        env = base_env()
        env["RPC_URL"] = "https://other.example"
        config = load_config(environ=env, use_dotenv=False)
        self.assertEqual(config.rpc_url, "https://polygon.example")

    def test_blank_env_values_ignored(self):
        env = base_env()
        env["START_USDC"] = "   "
        config = load_config(environ=env, use_dotenv=False)
        self.assertEqual(str(config.start_amount), "10000")

    def test_missing_required_setting(self):
        env = base_env()
        del env["UNISWAP_QUOTER"]
        with self.assertRaises(ConfigError) as ctx:
            load_config(environ=env, use_dotenv=False)
        self.assertIn("venue1.quoter", str(ctx.exception))

    def test_unparseable_amount_is_fatal(self):
        env = base_env()
        env["GAS_USDC_PER_TX"] = "cheap"
        with self.assertRaises(ConfigError):
            load_config(environ=env, use_dotenv=False)

    def test_negative_amount_is_fatal(self):
        env = base_env()
        env["PROFIT_THRESHOLD"] = "-0.5"
        with self.assertRaises(ConfigError):
            load_config(environ=env, use_dotenv=False)

    def test_invalid_fee_is_fatal(self):
        env = base_env()
        env["UNIV3_FEE"] = str(2**24)
        with self.assertRaises(ConfigError):
            load_config(environ=env, use_dotenv=False)

    def test_invalid_address_is_fatal(self):
        env = base_env()
        env["WETH"] = "0x1234"
        with self.assertRaises(ConfigError):
            load_config(environ=env, use_dotenv=False)


class TestYamlLoading:
    def test_yaml_with_env_override(self, tmp_path):
        data = base_dict()
        data["start_amount"] = 5000
        data["gas_per_tx"] = 0.01
        data["poll_sec"] = 2
        config_path = tmp_path / "arb.yaml"
        config_path.write_text(yaml.safe_dump(data))

        config = load_config(
            config_path, environ={"START_USDC": "7500"}, use_dotenv=False
        )

        assert str(config.start_amount) == "7500"
        assert str(config.gas_per_tx) == "0.01"
        assert config.poll_sec == 2.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml", environ={}, use_dotenv=False)

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("rpc_url: [unclosed")
        with pytest.raises(ConfigError, match="YAML"):
            load_config(config_path, environ={}, use_dotenv=False)

    def test_yaml_must_be_mapping(self, tmp_path):
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="dictionary"):
            load_config(config_path, environ={}, use_dotenv=False)

    def test_unknown_key_rejected(self):
        data = base_dict()
        data["slippage_bps"] = 5
        with pytest.raises(ConfigError, match="slippage_bps"):
            build_config(data)


class TestSchemaRules:
    def test_custom_tokens_and_names(self):
        data = base_dict()
        data["base_token"] = {"symbol": "USDT", "address": USDC_ADDR, "decimals": 6}
        data["intermediate_token"] = {"symbol": "WBTC", "address": WETH_ADDR, "decimals": 8}
        data["venue1"]["name"] = "UniV3"
        data["venue2"]["name"] = "QuickV3"

        config = build_config(data)

        assert config.intermediate.decimals == 8
        assert config.venue1_name == "UniV3"
        assert config.venue2_name == "QuickV3"

    def test_same_token_rejected(self):
        data = base_dict()
        data["intermediate_token"] = {"address": USDC_ADDR}
        with pytest.raises(ConfigError, match="must differ"):
            build_config(data)

    def test_same_venue_names_rejected(self):
        data = base_dict()
        data["venue2"]["name"] = "Uni"
        with pytest.raises(ConfigError, match="different names"):
            build_config(data)

    def test_rpc_url_must_be_http(self):
        data = base_dict()
        data["rpc_url"] = "ws://node.example"
        with pytest.raises(ConfigError, match="RPC URL"):
            build_config(data)

    def test_poll_sec_must_be_positive(self):
        data = base_dict()
        data["poll_sec"] = 0
        with pytest.raises(ConfigError, match="poll_sec"):
            build_config(data)

    def test_float_threshold_keeps_exact_value(self):
        data = base_dict()
        data["profit_threshold"] = 0.1
        config = build_config(data)
        assert config.profit_threshold == TokenAmount(100_000, 6)

    def test_amount_too_precise_is_rounded(self):
        data = base_dict()
        data["gas_per_tx"] = "0.0000015"
        config = build_config(data)
        assert config.gas_per_tx.raw == 2

    def test_path_timeout_covers_two_requests(self):
        data = base_dict()
        data["quote_timeout_sec"] = 4
        assert build_config(data).path_timeout_sec == 8

    def test_log_level_normalized(self):
        data = base_dict()
        data["log_level"] = "debug"
        assert build_config(data).log_level == "DEBUG"


def test_settings_from_env_builds_nested_dict():
    settings = settings_from_env({"UNIV3_FEE": "3000", "VENUE2_NAME": "QS", "OTHER": "x"})
    assert settings == {"venue1": {"fee": "3000"}, "venue2": {"name": "QS"}}


def test_fee_bound_matches_adapter():
    data = base_dict()
    data["venue1"]["fee"] = UINT24_MAX
    assert build_config(data).venue1_fee == UINT24_MAX

    data["venue1"]["fee"] = UINT24_MAX + 1
    with pytest.raises(ConfigError, match="venue1.fee"):
        build_config(data)
