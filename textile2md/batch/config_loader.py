"""YAML job configuration loading and validation.

This module handles loading and saving batch migration configuration from
YAML files. A job file lists which Textile documents to migrate and how the
run should behave when a document fails.
"""

import os
from typing import Any, Dict, Optional

import yaml

from textile2md.content_converter.errors import SettingsError
from textile2md.content_converter.settings import parse_timeout

from .errors import ConfigError, FilesystemError
from .models import BatchConfig, SourceConfig


class ConfigLoader:
    """Handles job configuration file loading, validation, and saving.

    Configuration file structure:
        sources:
          - path: "./wiki"
            pattern: "**/*.textile"
            output_dir: "./markdown"
            output_suffix: ".md"
        max_workers: 4
        timeout: 30           # optional; 0 = no limit, omitted = TEXTILE2MD_TIMEOUT
        on_error: abort
    """

    # Required top-level config fields
    REQUIRED_TOP_LEVEL_FIELDS = {'sources'}

    # Required fields for each source config
    REQUIRED_SOURCE_FIELDS = {'path'}

    ON_ERROR_POLICIES = ('abort', 'skip')

    # Default values for optional fields
    DEFAULTS = {
        'max_workers': 4,
        'on_error': 'abort',
    }

    @classmethod
    def load(cls, config_path: str) -> BatchConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            BatchConfig object with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, batch_config: BatchConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            batch_config: BatchConfig object to save

        Raises:
            FilesystemError: If file cannot be written
        """
        sources_list = []
        for source in batch_config.sources:
            source_dict: Dict[str, Any] = {
                'path': source.path,
                'pattern': source.pattern,
            }
            # Only include optional fields if they have non-default values
            if source.output_dir:
                source_dict['output_dir'] = source.output_dir
            if source.output_suffix != '.md':
                source_dict['output_suffix'] = source.output_suffix
            sources_list.append(source_dict)

        config_dict: Dict[str, Any] = {
            'sources': sources_list,
            'max_workers': batch_config.max_workers,
        }
        if batch_config.timeout is not None:
            config_dict['timeout'] = batch_config.timeout
        config_dict['on_error'] = batch_config.on_error

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> BatchConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated BatchConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        missing_fields = cls.REQUIRED_TOP_LEVEL_FIELDS - set(config_dict.keys())
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        sources_raw = config_dict.get('sources')
        if not isinstance(sources_raw, list):
            raise ConfigError(
                "Field 'sources' must be a list",
                'sources'
            )

        if not sources_raw:
            raise ConfigError(
                "At least one source is required",
                'sources'
            )

        sources = [cls._parse_source(i, source_dict) for i, source_dict in enumerate(sources_raw)]

        max_workers = config_dict.get('max_workers', cls.DEFAULTS['max_workers'])
        on_error = config_dict.get('on_error', cls.DEFAULTS['on_error'])

        try:
            max_workers = int(max_workers)
        except (ValueError, TypeError) as e:
            raise ConfigError(
                f"Invalid field type for optional field: {str(e)}",
                'max_workers'
            )

        if max_workers < 1:
            raise ConfigError(
                f"Field 'max_workers' must be at least 1, got {max_workers}",
                'max_workers'
            )

        # Without a timeout key the converter settings decide
        timeout = None
        if config_dict.get('timeout') is not None:
            try:
                timeout = parse_timeout(config_dict['timeout']) or 0.0
            except SettingsError as e:
                raise ConfigError(e.reason, 'timeout')

        if on_error not in cls.ON_ERROR_POLICIES:
            raise ConfigError(
                f"Field 'on_error' must be one of {', '.join(cls.ON_ERROR_POLICIES)}, got {on_error!r}",
                'on_error'
            )

        return BatchConfig(
            sources=sources,
            max_workers=max_workers,
            timeout=timeout,
            on_error=on_error,
        )

    @classmethod
    def _parse_source(cls, i: int, source_dict: Any) -> SourceConfig:
        if not isinstance(source_dict, dict):
            raise ConfigError(
                f"Source configuration at index {i} must be a dictionary",
                f'sources[{i}]'
            )

        missing_source_fields = cls.REQUIRED_SOURCE_FIELDS - set(source_dict.keys())
        if missing_source_fields:
            raise ConfigError(
                f"Missing required fields in source {i}: {', '.join(sorted(missing_source_fields))}",
                f'sources[{i}]'
            )

        path = str(source_dict['path'] or '')
        if not path.strip():
            raise ConfigError(
                f"Field 'path' in source {i} cannot be empty",
                f'sources[{i}].path'
            )

        pattern = str(source_dict.get('pattern') or SourceConfig.pattern)
        output_suffix = str(source_dict.get('output_suffix') or SourceConfig.output_suffix)
        if not output_suffix.startswith('.'):
            raise ConfigError(
                f"Field 'output_suffix' in source {i} must start with '.'",
                f'sources[{i}].output_suffix'
            )

        output_dir: Optional[str] = source_dict.get('output_dir')
        if output_dir is not None:
            output_dir = str(output_dir)

        return SourceConfig(
            path=path,
            pattern=pattern,
            output_dir=output_dir,
            output_suffix=output_suffix,
        )
