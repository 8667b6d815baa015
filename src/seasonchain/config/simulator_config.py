# File: src/seasonchain/config/simulator_config.py

import yaml
import os
import math
from dataclasses import dataclass, asdict
from typing import Dict, Any

from ..emissions.schedule import EmissionConfig
from ..exceptions import ConfigurationError
from ..utils.config import Config

@dataclass(frozen=True)
class MiningConfig:
    """Block production loop parameters"""
    tick_seconds: float = Config.TICK_SECONDS
    difficulty_retarget_blocks: int = Config.DIFFICULTY_RETARGET_BLOCKS
    max_difficulty_adjustment: float = Config.MAX_DIFFICULTY_ADJUSTMENT
    initial_difficulty: float = Config.INITIAL_DIFFICULTY
    max_blocks_in_memory: int = Config.MAX_BLOCKS_IN_MEMORY
    max_transactions_per_block: int = Config.MAX_TRANSACTIONS_PER_BLOCK
    min_logical_tx: int = Config.MIN_LOGICAL_TX
    max_logical_tx: int = Config.MAX_LOGICAL_TX
    max_tx_amount: float = Config.MAX_TX_AMOUNT
    max_tx_fee: float = Config.MAX_TX_FEE
    orphan_probability: float = Config.ORPHAN_PROBABILITY

    def __post_init__(self):
        if not math.isfinite(self.tick_seconds) or self.tick_seconds <= 0:
            raise ConfigurationError(f"tick_seconds must be positive, got {self.tick_seconds}")
        if self.difficulty_retarget_blocks < 1:
            raise ConfigurationError("difficulty_retarget_blocks must be at least 1")
        if self.max_difficulty_adjustment < 1:
            raise ConfigurationError("max_difficulty_adjustment must be at least 1")
        if self.initial_difficulty <= 0:
            raise ConfigurationError("initial_difficulty must be positive")
        if self.max_blocks_in_memory < 1:
            raise ConfigurationError("max_blocks_in_memory must be at least 1")
        if self.max_transactions_per_block < 0:
            raise ConfigurationError("max_transactions_per_block cannot be negative")
        if not 0 <= self.min_logical_tx <= self.max_logical_tx:
            raise ConfigurationError("logical transaction range is invalid")
        if not 0 <= self.orphan_probability <= 1:
            raise ConfigurationError("orphan_probability must be within [0, 1]")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MiningConfig':
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown mining settings: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

class SimulatorConfig:
    def __init__(self, config_path: str = "config/simulator.yaml"):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return self._create_default_config()

        with open(self.config_path, 'r') as f:
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")

        if loaded is None:
            return self.default_config()
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{self.config_path} must contain a mapping")
        return loaded

    @staticmethod
    def default_config() -> Dict[str, Any]:
        return {
            "emissions": {
                "season_days": Config.SEASON_DAYS,
                "target_block_interval_seconds": Config.TARGET_BLOCK_INTERVAL_SEC,
                "total_emission": Config.TOTAL_EMISSION,
                "halving_epochs": Config.HALVING_EPOCHS
            },
            "mining": MiningConfig().to_dict(),
            "ledger": {
                "starting_balance": Config.STARTING_BALANCE,
                "initial_circulating": Config.INITIAL_CIRCULATING,
                "network_weight_floor": Config.NETWORK_WEIGHT_FLOOR
            },
            "clock": {
                "time_acceleration": Config.TIME_ACCELERATION
            },
            "api": {
                "host": Config.API_HOST,
                "port": Config.API_PORT
            },
            "monitoring": {
                "metrics_port": None,
                "log_dir": "logs",
                "log_level": "INFO"
            }
        }

    def _create_default_config(self) -> Dict[str, Any]:
        config = self.default_config()

        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.config_path, 'w') as f:
            yaml.dump(config, f)

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update(self, key: str, value: Any):
        """Update configuration value."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value

        with open(self.config_path, 'w') as f:
            yaml.dump(self.config, f)

    def emission_config(self) -> EmissionConfig:
        section = self.get("emissions")
        if not isinstance(section, dict):
            raise ConfigurationError("Missing 'emissions' section")
        return EmissionConfig.from_dict(section)

    def mining_config(self) -> MiningConfig:
        section = self.get("mining", {}) or {}
        if not isinstance(section, dict):
            raise ConfigurationError("'mining' section must be a mapping")
        try:
            return MiningConfig.from_dict(section)
        except TypeError as e:
            raise ConfigurationError(f"Invalid mining settings: {e}")
