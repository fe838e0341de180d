"""Task store backends."""

from typing import Any, Dict

from ..utils.exceptions import ConfigurationError
from .base import TaskStore
from .fallback import FallbackTaskStore
from .local import LocalTaskStore
from .remote import RemoteTaskStore


def build_store(config: Dict[str, Any]) -> TaskStore:
    """Create the task store described by the `storage` config section."""
    storage = config.get('storage', {})
    backend = storage.get('backend', 'local')
    if backend not in ('local', 'remote', 'fallback'):
        raise ConfigurationError(f"Unknown storage backend: {backend}")

    local = LocalTaskStore(storage.get('local_path', 'data/tasks.json'))
    if backend == 'local':
        return local

    remote_config = storage.get('remote', {})
    base_url = remote_config.get('base_url')
    if not base_url:
        raise ConfigurationError(f"storage.remote.base_url is required for the '{backend}' backend")

    remote = RemoteTaskStore(
        base_url=base_url,
        api_key=remote_config.get('api_key'),
        table=remote_config.get('table', 'tasks'),
        timeout_seconds=remote_config.get('timeout_seconds', 10.0),
    )
    if backend == 'remote':
        return remote
    return FallbackTaskStore(remote, local)


__all__ = ['TaskStore', 'LocalTaskStore', 'RemoteTaskStore', 'FallbackTaskStore', 'build_store']
