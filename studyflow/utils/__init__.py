"""Utility functions."""

from .config import load_config, get_default_config, resolve_config
from .datetime_utils import now_utc, parse_timestamp, to_local

__all__ = ['load_config', 'get_default_config', 'resolve_config', 'now_utc', 'parse_timestamp', 'to_local']
