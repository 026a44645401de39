"""
Configuration management for the POM Version Manager.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger('config')


@dataclass
class SessionConfig:
    """Configuration for a version manager run."""
    workspace: str = "vman-workspace"
    reports: str = "vman-reports"
    pom_pattern: str = "**/*.pom,**/pom.xml"
    preserve_files: bool = False
    normalize_bom_usage: bool = False
    recursive: bool = True
    toolchain: Optional[str] = None
    boms: List[str] = field(default_factory=list)


@dataclass
class ReportingConfig:
    """Configuration for report output."""
    formats: List[str] = field(default_factory=lambda: ["json", "text"])


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_file: Optional[str] = None
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    session: SessionConfig = field(default_factory=SessionConfig)
    property_mappings: Dict[str, str] = field(default_factory=dict)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Config object with loaded settings

    Raises:
        ConfigurationError: If configuration file is invalid
    """
    config = Config()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration file: {e}")

        if config_data:
            if not isinstance(config_data, dict):
                raise ConfigurationError("Configuration file must contain a mapping")
            _update_config_from_dict(config, config_data)
            logger.info(f"Loaded configuration from {config_path}")

    elif config_path:
        logger.warning(f"Configuration file not found: {config_path}")

    return config


def _update_section(section, data: Dict, name: str) -> None:
    if not isinstance(data, dict):
        raise ConfigurationError(f"Section '{name}' must be a mapping")
    for key, value in data.items():
        if not hasattr(section, key):
            raise ConfigurationError(f"Unknown option '{name}.{key}'")
        setattr(section, key, value)


def _update_config_from_dict(config: Config, config_data: Dict) -> None:
    """
    Update configuration object from dictionary data.

    Args:
        config: Config object to update
        config_data: Dictionary with configuration data
    """
    if 'session' in config_data:
        _update_section(config.session, config_data['session'], 'session')
        if isinstance(config.session.boms, str):
            config.session.boms = [config.session.boms]

    if 'property_mappings' in config_data:
        mappings = config_data['property_mappings'] or {}
        if not isinstance(mappings, dict):
            raise ConfigurationError("'property_mappings' must be a mapping of property name to value")
        config.property_mappings = {str(k): str(v) for k, v in mappings.items()}

    if 'reporting' in config_data:
        _update_section(config.reporting, config_data['reporting'], 'reporting')

    if 'logging' in config_data:
        _update_section(config.logging, config_data['logging'], 'logging')


def get_default_config_path() -> Optional[str]:
    """
    Get the default configuration file path.

    Returns:
        Path to default config file if it exists, None otherwise
    """
    possible_paths = [
        'vman.yaml',
        'vman.yml',
        os.path.expanduser('~/.vman.yaml'),
        os.path.expanduser('~/.vman.yml'),
    ]

    for path in possible_paths:
        if os.path.exists(path):
            return path

    return None
