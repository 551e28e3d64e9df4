"""
Runtime Configuration

Defaults for order construction and the escrow contract's acceptance rules.
"""

from __future__ import annotations

import copy
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


# 24 hours
DEFAULT_ORDER_TTL_SECONDS = 86_400

# ft_on_transfer refuses orders with expiration < block_timestamp + 500
DEFAULT_MIN_EXPIRATION_MARGIN_NS = 500


def parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes")


# env var -> (section, field, parser)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "HASHLOCK_ORDER_TTL_SECONDS": ("orders", "ttl_seconds", int),
    "HASHLOCK_ORDER_PARTS": ("orders", "parts", int),
    "HASHLOCK_SECRET_BYTES": ("orders", "secret_bytes", int),
    "HASHLOCK_ESCROW_ACCOUNT": ("contract", "escrow_account", str),
    "HASHLOCK_MIN_EXPIRATION_MARGIN_NS": ("contract", "min_expiration_margin_ns", int),
    "HASHLOCK_STRIP_HASH_PREFIX": ("contract", "strip_hash_prefix", parse_bool),
    "HASHLOCK_LOG_LEVEL": ("logging", "level", str),
    "HASHLOCK_LOG_FILE": ("logging", "log_file", str),
}


@dataclass
class OrderDefaults:
    """Defaults applied when building a maker order."""
    ttl_seconds: int = DEFAULT_ORDER_TTL_SECONDS
    parts: int = 1
    secret_bytes: int = 32


@dataclass
class ContractConfig:
    """What the source escrow expects from a submitted order."""
    escrow_account: Optional[str] = None
    min_expiration_margin_ns: int = DEFAULT_MIN_EXPIRATION_MARGIN_NS
    strip_hash_prefix: bool = True


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    orders: OrderDefaults = field(default_factory=OrderDefaults)
    contract: ContractConfig = field(default_factory=ContractConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Collect overrides from HASHLOCK_* environment variables.

        All env reading goes through here; see ENV_OVERRIDES for the names.
        Unset or empty variables are ignored.
        """
        overrides: dict[str, Any] = {}
        for var, (section, key, parse) in ENV_OVERRIDES.items():
            raw = os.getenv(var)
            if raw:
                overrides.setdefault(section, {})[key] = parse(raw)
        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Create configuration from a dictionary."""
        orders_data = data.get("orders", {})
        contract_data = data.get("contract", {})
        logging_data = data.get("logging", {})

        return cls(
            orders=OrderDefaults(**orders_data) if orders_data else OrderDefaults(),
            contract=ContractConfig(**contract_data) if contract_data else ContractConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict, accepted back by from_dict."""
        return asdict(self)


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
