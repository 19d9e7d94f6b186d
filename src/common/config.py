"""YAML config loading shared by pipeline stages."""

import os
from pathlib import Path
from typing import Callable, Generic, TypeVar

import yaml

T = TypeVar('T')


def find_config_path(
    config_name: str | None,
    config_dir: Path,
    default_name: str = "prod",
    env_var: str | None = None,
) -> Path:
    """Resolve ``<config_dir>/<name>.yaml``.

    The name comes from ``config_name``, then ``env_var`` if set, then
    ``default_name``.

    Raises:
        FileNotFoundError: If the resolved file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = Path(config_dir) / f"{config_name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return config_path


def load_yaml(path: Path) -> dict:
    """Load a YAML mapping; an empty file loads as {}."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class ConfigSingleton(Generic[T]):
    """Process-wide config holder with lazy loading.

    Example:
        >>> _manager = ConfigSingleton(load_config)
        >>> get_config = _manager.get
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._loader = loader
        self._config: T | None = None

    def get(self) -> T:
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config set and no loader configured")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        self._config = config

    def reset(self) -> None:
        """Forget the current config so the next get() reloads it."""
        self._config = None
