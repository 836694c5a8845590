"""Load ProwlConfig from prowl.yaml or prowl.toml if present.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from prowl._errors import ConfigError
from prowl.config import ProwlConfig

_KNOWN_KEYS = frozenset({"controllers_dir", "host", "port", "debug", "max_events"})


def load_config(root: Path, **overrides: object) -> ProwlConfig:
    """Load ProwlConfig from root, optionally merging prowl.yaml.

    Looks for prowl.yaml, prowl.yml, or prowl.toml in root.  Overrides whose
    value is None are ignored so CLI flags that were not given do not mask
    file values.

    Raises:
        ConfigError: If a config file cannot be parsed.

    """
    file_config = _read_prowl_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    return ProwlConfig(root=Path(root), **merged)


def _read_prowl_config(root: Path) -> dict[str, object]:
    """Read prowl config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("prowl.yaml", "prowl.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "prowl.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid config file {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_prowl_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid config file {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_prowl_section(data, path)


def _flatten_prowl_section(data: object, path: Path) -> dict[str, object]:
    """Extract prowl.* keys and known top-level keys into one dict."""
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping"
        raise ConfigError(msg)

    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("prowl")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
