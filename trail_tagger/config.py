"""
Configuration loading for trail-tagger

Settings are read from a YAML file using the same camelCase keys the
`parse` command accepts on the command line. Command-line values are merged
over the file by the CLI.
"""
import logging
import os
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/config.yaml'
SECTION_NAME = 'trailTagger'

_TIMESTAMP_FIELDS = ('start_timestamp', 'end_timestamp')
_HOUR_FIELDS = ('start_hour', 'end_hour')


@dataclass
class ParseSettings:
    """Settings consumed by the parse pipeline"""
    region: Optional[str] = None
    profile: Optional[str] = None
    input_file: Optional[str] = None
    start_timestamp: Optional[str] = None
    end_timestamp: Optional[str] = None
    start_hour: Optional[int] = None
    end_hour: Optional[int] = None
    resource_types: List[str] = field(default_factory=list)
    include_event: bool = False
    tag_patterns: List[str] = field(default_factory=list)
    filter_patterns: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'ParseSettings':
        return cls(
            region=_optional_str(config, 'region'),
            profile=_optional_str(config, 'profile'),
            input_file=_optional_str(config, 'inputFile'),
            start_timestamp=_timestamp(config, 'startTimeStamp'),
            end_timestamp=_timestamp(config, 'endTimeStamp'),
            start_hour=_optional_int(config, 'startHour'),
            end_hour=_optional_int(config, 'endHour'),
            resource_types=_string_list(config, 'resourceTypes'),
            include_event=_bool(config, 'includeEvent'),
            tag_patterns=_string_list(config, 'tagPatterns'),
            filter_patterns=_string_list(config, 'filterPatterns')
        )

    def with_overrides(self, **overrides) -> 'ParseSettings':
        """
        Return a copy with every override that is not None applied.

        A window bound given as an override replaces the whole window of the
        base settings: overriding an hour drops the base timestamp pair and
        overriding a timestamp drops the base hour pair.
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}

        overrides_hours = any(k in overrides for k in _HOUR_FIELDS)
        overrides_timestamps = any(k in overrides for k in _TIMESTAMP_FIELDS)
        if overrides_hours and not overrides_timestamps:
            overrides.update(dict.fromkeys(_TIMESTAMP_FIELDS))
        elif overrides_timestamps and not overrides_hours:
            overrides.update(dict.fromkeys(_HOUR_FIELDS))

        return replace(self, **overrides)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load the YAML config file. A missing file yields an empty config."""
    if not os.path.exists(config_path):
        logger.debug(f"Config file not found: {config_path}")
        return {}

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config {config_path}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config {config_path} must be a mapping, got {type(config).__name__}")

    section = config.pop(SECTION_NAME, None)
    if section is not None:
        if not isinstance(section, dict):
            raise ConfigError(f"'{SECTION_NAME}' section in {config_path} must be a mapping")
        config.update(section)

    logging_section = config.get('logging')
    if logging_section is not None and not isinstance(logging_section, dict):
        raise ConfigError(f"'logging' section in {config_path} must be a mapping, got {logging_section!r}")

    return config


def _optional_str(config: Dict[str, Any], key: str) -> Optional[str]:
    value = config.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value or None


def _timestamp(config: Dict[str, Any], key: str) -> Optional[str]:
    # Unquoted YAML timestamps arrive as datetime objects
    value = config.get(key)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return _optional_str(config, key)


def _optional_int(config: Dict[str, Any], key: str) -> Optional[int]:
    value = config.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    return value


def _bool(config: Dict[str, Any], key: str) -> bool:
    value = config.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _string_list(config: Dict[str, Any], key: str) -> List[str]:
    value = config.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")
    return list(value)
