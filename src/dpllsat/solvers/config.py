"""
Configuration management for the solvers and the command line.
Uses OmegaConf for flexible configuration handling.
"""

import copy
import logging
import os
from typing import Any

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from dpllsat.search import STRATEGIES
from dpllsat.utils.exceptions import ConfigurationError
from dpllsat.utils.logging_utils import StructuredLogger

# Set up logging
logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRACE_FORMATS = (StructuredLogger.FORMAT_JSON, StructuredLogger.FORMAT_CSV)


def validate_config(config: DictConfig) -> None:
    """
    Check the values the solvers and the command line rely on.

    Args:
        config: Configuration to check

    Raises:
        ConfigurationError: naming the first offending key
    """
    strategy = OmegaConf.select(config, "solver.dpll.strategy")
    if strategy not in STRATEGIES:
        raise ConfigurationError(
            f"solver.dpll.strategy must be one of {STRATEGIES}, got {strategy!r}"
        )

    max_vars = OmegaConf.select(config, "solver.bruteforce.max_vars")
    if isinstance(max_vars, bool) or not isinstance(max_vars, int) or max_vars < 0:
        raise ConfigurationError(
            f"solver.bruteforce.max_vars must be a non-negative integer, got {max_vars!r}"
        )

    level = OmegaConf.select(config, "logging.level")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of {LOG_LEVELS}, got {level!r}")

    trace_format = OmegaConf.select(config, "logging.trace_format")
    if trace_format not in TRACE_FORMATS:
        raise ConfigurationError(
            f"logging.trace_format must be one of {TRACE_FORMATS}, got {trace_format!r}"
        )


class SolverConfig:
    """
    Configuration manager for SAT solvers.
    Handles loading, merging, and accessing configuration parameters.
    """

    DEFAULT_CONFIG = {
        "solver": {
            "name": "dpll",
            "dpll": {
                "strategy": "iterative",
            },
            "bruteforce": {
                "max_vars": 20,
            },
        },
        "logging": {
            "level": "WARNING",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "trace_dir": None,
            "trace_format": "json",
        },
    }

    def __init__(self, config_path: str | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a YAML configuration file
        """
        self.config: DictConfig = OmegaConf.create(self.DEFAULT_CONFIG)

        if config_path:
            self._load_config_file(config_path)

    def _load_config_file(self, config_path: str) -> None:
        """
        Merge a YAML configuration file over the current configuration.

        Args:
            config_path: Path to configuration file
        """
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            file_config = OmegaConf.load(config_path)
            merged = OmegaConf.merge(self.config, file_config)
        except (OSError, yaml.YAMLError, OmegaConfBaseException) as e:
            raise ConfigurationError(
                f"Error loading configuration file {config_path}: {e}"
            ) from e
        validate_config(merged)
        self.config = merged
        logger.debug(f"Loaded configuration from {config_path}")

    def update(self, config_dict: dict[str, Any]) -> None:
        """
        Update the configuration with the given dictionary.

        Args:
            config_dict: Dictionary to update the configuration with
        """
        try:
            merged = OmegaConf.merge(self.config, config_dict)
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid configuration update: {e}") from e
        validate_config(merged)
        self.config = merged

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.
        Supports dot notation for nested keys (e.g., "solver.dpll.strategy").

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return OmegaConf.select(self.config, key, default=default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key.
        Supports dot notation for nested keys (e.g., "logging.level").

        Args:
            key: Configuration key
            value: Value to set
        """
        candidate = copy.deepcopy(self.config)
        OmegaConf.update(candidate, key, value, merge=True)
        validate_config(candidate)
        self.config = candidate

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        return OmegaConf.to_container(self.config, resolve=True)

    def save(self, file_path: str) -> None:
        """
        Save the configuration to a YAML file.

        Args:
            file_path: Path to save the configuration to
        """
        os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
        OmegaConf.save(self.config, file_path)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


# Create a global configuration instance
config = SolverConfig()


def load_config(config_path: str | None = None) -> SolverConfig:
    """
    Load configuration from a file.

    Args:
        config_path: Path to configuration file; None resets to the defaults

    Returns:
        Configuration instance
    """
    global config
    config = SolverConfig(config_path)
    return config


def get_config() -> SolverConfig:
    """
    Get the global configuration instance.

    Returns:
        Configuration instance
    """
    return config
