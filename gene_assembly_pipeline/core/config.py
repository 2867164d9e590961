#!/usr/bin/env python3

"""
Configuration management for the gene assembly pipeline.

Centralized configuration with support for file-based configuration
and environment variable overrides.
"""

import os
import json
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

import yaml

from .exceptions import ConfigurationError


@dataclass
class PipelineConfig:
    """Centralized configuration for the gene assembly pipeline."""

    # Grouping tags
    gene_tag: str = "gene_id"
    transcript_tag: str = "transcript_id"

    # Performance settings
    memory_limit_mb: int = 4096
    enable_memory_monitoring: bool = True
    memory_check_interval: int = 1000  # genes

    # Logging
    progress_interval: int = 10000  # genes
    debug_mode: bool = False

    @classmethod
    def from_file(cls, config_path: str) -> 'PipelineConfig':
        """Load configuration from file (JSON or YAML)."""
        return cls.from_dict(cls.read_file(config_path))

    @staticmethod
    def read_file(config_path: str) -> Dict[str, Any]:
        """Read the raw settings mapping from a JSON or YAML file."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                if config_path.lower().endswith(('.yaml', '.yml')):
                    config_data = yaml.safe_load(f)
                else:
                    config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML configuration file format: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")

        return config_data

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'PipelineConfig':
        """Create configuration from dictionary."""
        # Filter out unknown keys
        known_keys = set(cls.__dataclass_fields__.keys())
        filtered_dict = {k: v for k, v in config_dict.items() if k in known_keys}

        try:
            return cls(**filtered_dict)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration parameters: {e}")

    @classmethod
    def from_env(cls) -> 'PipelineConfig':
        """Load configuration from environment variables."""
        config = cls()

        env_mappings = {
            'PIPELINE_GENE_TAG': ('gene_tag', str),
            'PIPELINE_TRANSCRIPT_TAG': ('transcript_tag', str),
            'PIPELINE_MEMORY_LIMIT_MB': ('memory_limit_mb', int),
            'PIPELINE_MEMORY_CHECK_INTERVAL': ('memory_check_interval', int),
            'PIPELINE_PROGRESS_INTERVAL': ('progress_interval', int),
            'PIPELINE_DEBUG_MODE': ('debug_mode', lambda x: x.lower() in ('true', '1', 'yes')),
        }

        for env_var, (field_name, converter) in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                try:
                    setattr(config, field_name, converter(env_value))
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(f"Invalid environment variable {env_var}: {e}")

        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to file."""
        config_dict = self.to_dict()

        try:
            with open(config_path, 'w') as f:
                if config_path.lower().endswith(('.yaml', '.yml')):
                    yaml.safe_dump(config_dict, f, default_flow_style=False)
                else:
                    json.dump(config_dict, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration: {e}")

    def validate(self) -> None:
        """Validate configuration parameters."""
        if not self.gene_tag or not self.gene_tag.strip():
            raise ConfigurationError("gene_tag must not be empty")

        if not self.transcript_tag or not self.transcript_tag.strip():
            raise ConfigurationError("transcript_tag must not be empty")

        if self.memory_limit_mb < 100:
            raise ConfigurationError("memory_limit_mb must be >= 100")

        if self.memory_check_interval < 1:
            raise ConfigurationError("memory_check_interval must be >= 1")

        if self.progress_interval < 1:
            raise ConfigurationError("progress_interval must be >= 1")

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()


def load_config(config_path: Optional[str] = None,
                use_env: bool = True) -> PipelineConfig:
    """
    Load configuration with priority: file > environment > defaults.

    Args:
        config_path: Path to configuration file (optional)
        use_env: Whether to load environment variables

    Returns:
        PipelineConfig: Loaded configuration
    """
    config = PipelineConfig()

    if use_env:
        env_config = PipelineConfig.from_env()
        # Merge non-default values from environment
        for field_name in PipelineConfig.__dataclass_fields__:
            env_value = getattr(env_config, field_name)
            if env_value != getattr(config, field_name):
                setattr(config, field_name, env_value)

    if config_path:
        # Only settings present in the file override environment values
        file_data = PipelineConfig.read_file(config_path)
        for field_name in PipelineConfig.__dataclass_fields__:
            if field_name in file_data:
                setattr(config, field_name, file_data[field_name])
        config.validate()

    return config
