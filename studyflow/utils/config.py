"""Configuration management."""

import copy
import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from .exceptions import ConfigurationError


DEFAULT_CATEGORIES = [
    'class',
    'project',
    'work',
    'personal',
    'self-care',
    'pet-care',
    'housework',
    'health-care',
    'fitness',
    'shopping',
    'workshop',
    'finance',
    'learning',
    'relax',
]


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(path, 'r') as f:
            if path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported config file format: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")
    return data


def merge_config(base: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Deep-merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load a config file (if it exists) layered over the defaults."""
    defaults = get_default_config()
    if not config_path or not Path(config_path).exists():
        return defaults
    return merge_config(defaults, load_config(config_path))


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'categories': list(DEFAULT_CATEGORIES),
        'procrastination': {
            'current_weight': 0.3,
            'new_weight': 0.7,
            'high_threshold': 1.5,
        },
        'deadlines': {
            'danger_hours': 6,
            'warning_hours': 24,
            'realistic_buffer': 0.2,
        },
        'stats': {
            'best_hours_count': 5,
        },
        'task_defaults': {
            'estimated_minutes': 30,
            'deadline_offset_hours': 24,
            'category': 'class',
            'priority': 'medium',
        },
        'storage': {
            'backend': 'local',  # local | remote | fallback
            'local_path': 'data/tasks.json',
            'remote': {
                'base_url': None,
                'api_key': None,
                'table': 'tasks',
                'timeout_seconds': 10.0,
            },
        },
        'logging': {
            'level': 'INFO',
            'console_color': True,
            'log_file': None,
        },
    }
