"""YAML configuration for section clustering and ranking."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from common.config import ConfigSingleton, find_config_path, load_yaml
from cluster_news.models import ClusterOptions

CONFIG_DIR = Path(__file__).parent / "configs"
CONFIG_ENV_VAR = "CLUSTER_CONFIG_ENV"


@dataclass
class ClusteringConfig:
    """Per-section thresholds plus the ranking rules applied after clustering."""

    default: ClusterOptions = field(default_factory=ClusterOptions)
    sections: dict[str, ClusterOptions] = field(default_factory=dict)
    max_age_hours: int = 48
    max_clusters: int = 50
    trusted_sources: dict[str, list[str]] = field(default_factory=dict)
    single_source_sections: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_age_hours <= 0:
            raise ValueError(f"max_age_hours must be positive, got {self.max_age_hours}")
        if self.max_clusters <= 0:
            raise ValueError(f"max_clusters must be positive, got {self.max_clusters}")

    def options_for(self, section: str) -> ClusterOptions:
        """Options for a section, falling back to the default."""
        return self.sections.get(section, self.default)

    def trusted_for(self, section: str) -> list[str]:
        return self.trusted_sources.get(section, [])


def _parse_options(data: dict[str, Any] | None, fallback: ClusterOptions) -> ClusterOptions:
    data = data or {}
    return ClusterOptions(
        similarity_threshold=float(data.get("similarity_threshold", fallback.similarity_threshold)),
        min_pair_similarity=float(data.get("min_pair_similarity", fallback.min_pair_similarity)),
    )


def _parse_config(data: dict[str, Any]) -> ClusteringConfig:
    """Parse config dictionary into ClusteringConfig object."""
    default = _parse_options(data.get("default"), ClusterOptions())
    sections = {
        name: _parse_options(options, default)
        for name, options in (data.get("sections") or {}).items()
    }
    trusted = {
        name: list(sources or [])
        for name, sources in (data.get("trusted_sources") or {}).items()
    }
    return ClusteringConfig(
        default=default,
        sections=sections,
        max_age_hours=int(data.get("max_age_hours", 48)),
        max_clusters=int(data.get("max_clusters", 50)),
        trusted_sources=trusted,
        single_source_sections=list(data.get("single_source_sections") or []),
    )


def load_config(config_name: str | None = None, config_dir: Path = CONFIG_DIR) -> ClusteringConfig:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses CLUSTER_CONFIG_ENV env var or "prod".
        config_dir: Directory holding the YAML files.

    Returns:
        Loaded ClusteringConfig object

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If a threshold or limit is out of range.
    """
    path = find_config_path(config_name, config_dir, env_var=CONFIG_ENV_VAR)
    return _parse_config(load_yaml(path))


_manager: ConfigSingleton[ClusteringConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
