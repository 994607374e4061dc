"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
A minimal config only needs a project name; every section has defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from covidatlas.config.settings import (
    DataPathsConfig,
    GlobeConfig,
    MapsConfig,
    MapViewConfig,
    OutputConfig,
    PipelineConfig,
    RankingConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def _build_data_paths(data: dict[str, Any]) -> DataPathsConfig:
    """Build data paths; the YAML key 'root' maps to data_root."""
    fields = {k: Path(v) for k, v in data.items() if k != "root" and v}
    if data.get("root"):
        fields["data_root"] = Path(data["root"])
    return DataPathsConfig(**fields)


def _build_maps(data: dict[str, Any]) -> MapsConfig:
    """Build map config, turning view blocks into MapViewConfig models."""
    fields = dict(data)
    for view_key in ("global_view", "us_view"):
        view = fields.get(view_key)
        if isinstance(view, dict):
            fields[view_key] = MapViewConfig(
                center=tuple(view["center"]),
                zoom=view["zoom"],
            )
    for color_key in ("below_color", "above_color"):
        if color_key in fields:
            fields[color_key] = tuple(fields[color_key])
    if "basemaps" in fields:
        # Partial overrides keep the remaining defaults
        fields["basemaps"] = {**MapsConfig().basemaps, **fields["basemaps"]}
    return MapsConfig(**fields)


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> PipelineConfig:
    """
    Load atlas configuration from YAML file(s).

    Minimal config requires only:
        - project: str

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated PipelineConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and potential_base != config_path
            else {}
        )

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    project = merged.get("project")
    if not project:
        msg = "Config must specify 'project' name"
        raise ValueError(msg)

    output_data = merged.get("output", {})
    output = OutputConfig(
        output_root=Path(output_data.get("root", "./output")),
    )

    return PipelineConfig(
        project=str(project),
        data_paths=_build_data_paths(merged.get("data", {})),
        maps=_build_maps(merged.get("maps", {})),
        ranking=RankingConfig(**merged.get("ranking", {})),
        globe=GlobeConfig(**merged.get("globe", {})),
        output=output,
    )
