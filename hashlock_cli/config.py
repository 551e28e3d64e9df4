"""
CLI Configuration

Configuration management for the hashlock CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from core.config.runtime import (
    DEFAULT_MIN_EXPIRATION_MARGIN_NS,
    DEFAULT_ORDER_TTL_SECONDS,
    ContractConfig,
    LoggingConfig,
    OrderDefaults,
    RuntimeConfig,
    parse_bool,
)


# Environment variable prefix
ENV_PREFIX = "HASHLOCK_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Order defaults
    ttl_seconds: int = DEFAULT_ORDER_TTL_SECONDS
    parts: int = 1
    secret_bytes: int = 32

    # Contract
    escrow_account: str | None = None
    min_expiration_margin_ns: int = DEFAULT_MIN_EXPIRATION_MARGIN_NS
    strip_hash_prefix: bool = True

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    def to_runtime_config(self) -> RuntimeConfig:
        return RuntimeConfig(
            orders=OrderDefaults(
                ttl_seconds=self.ttl_seconds,
                parts=self.parts,
                secret_bytes=self.secret_bytes,
            ),
            contract=ContractConfig(
                escrow_account=self.escrow_account,
                min_expiration_margin_ns=self.min_expiration_margin_ns,
                strip_hash_prefix=self.strip_hash_prefix,
            ),
            logging=LoggingConfig(level=self.log_level, log_file=self.log_file),
        )


def load_config_from_env(config: CLIConfig | None = None) -> CLIConfig:
    """Apply environment variables on top of config (or defaults)."""
    config = config or CLIConfig()

    if os.getenv(f"{ENV_PREFIX}ORDER_TTL_SECONDS"):
        config.ttl_seconds = int(os.getenv(f"{ENV_PREFIX}ORDER_TTL_SECONDS", "86400"))
    if os.getenv(f"{ENV_PREFIX}ORDER_PARTS"):
        config.parts = int(os.getenv(f"{ENV_PREFIX}ORDER_PARTS", "1"))
    if os.getenv(f"{ENV_PREFIX}SECRET_BYTES"):
        config.secret_bytes = int(os.getenv(f"{ENV_PREFIX}SECRET_BYTES", "32"))
    if os.getenv(f"{ENV_PREFIX}ESCROW_ACCOUNT"):
        config.escrow_account = os.getenv(f"{ENV_PREFIX}ESCROW_ACCOUNT")
    if os.getenv(f"{ENV_PREFIX}MIN_EXPIRATION_MARGIN_NS"):
        config.min_expiration_margin_ns = int(
            os.getenv(f"{ENV_PREFIX}MIN_EXPIRATION_MARGIN_NS", "500")
        )
    if os.getenv(f"{ENV_PREFIX}STRIP_HASH_PREFIX"):
        config.strip_hash_prefix = parse_bool(os.getenv(f"{ENV_PREFIX}STRIP_HASH_PREFIX", "true"))
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    orders = data.get("orders", {})
    config.ttl_seconds = orders.get("ttl_seconds", config.ttl_seconds)
    config.parts = orders.get("parts", config.parts)
    config.secret_bytes = orders.get("secret_bytes", config.secret_bytes)

    contract = data.get("contract", {})
    config.escrow_account = contract.get("escrow_account", config.escrow_account)
    config.min_expiration_margin_ns = contract.get(
        "min_expiration_margin_ns", config.min_expiration_margin_ns
    )
    config.strip_hash_prefix = contract.get("strip_hash_prefix", config.strip_hash_prefix)

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "hashlock.json",
            Path.cwd() / ".hashlock.json",
            Path.home() / ".config" / "hashlock" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return load_config_from_env(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "orders": {
    "ttl_seconds": 86400,
    "parts": 1,
    "secret_bytes": 32
  },
  "contract": {
    "escrow_account": null,
    "min_expiration_margin_ns": 500,
    "strip_hash_prefix": true
  },
  "log_level": "WARNING",
  "log_file": null
}
"""
