"""
config.py

Responsibility: Load optional per-project settings from `wargo.yaml`.

Every key has a default, so a project without the file builds against the
upstream wasm-rgame-js releases. Recognised keys:

- framework_crate: str          crate whose locked version selects the release
- release.owner / release.repo  GitHub repository publishing the js/html assets
- release.tag_prefix: str       prefix stripped from tags before semver parsing
- target: str                   cargo target triple
- profile: debug | release
- output_dir: str               root of the deploy directories
- github.api_base: str
- wasm_bindgen_args: list[str]
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from wargo.errors import WargoError

CONFIG_FILE_NAME = "wargo.yaml"

_PROFILES = ("debug", "release")


class ConfigError(WargoError):
    pass


@dataclass(frozen=True)
class ReleaseSource:
    """Where the companion asset releases are published."""

    owner: str = "DarrenTsung"
    repo: str = "wasm-rgame-js"
    tag_prefix: str = "v"


@dataclass(frozen=True)
class WargoConfig:
    """Settings used by the build and init pipelines."""

    framework_crate: str = "wasm-rgame"
    release: ReleaseSource = field(default_factory=ReleaseSource)
    target: str = "wasm32-unknown-unknown"
    profile: str = "debug"
    output_dir: str = "target/wasm-rgame"
    api_base: str = "https://api.github.com"
    github_token: str | None = None
    wasm_bindgen_args: tuple[str, ...] = ("--no-modules", "--no-typescript")

    def with_overrides(self, **overrides: Any) -> WargoConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    raw = data.get(key) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"`{key}` must be an object/mapping when provided.")
    return raw


def _str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    value = str(value).strip()
    if not value:
        raise ConfigError(f"`{key}` must not be empty.")
    return value


def parse_config(data: dict[str, Any]) -> WargoConfig:
    """
    Build a `WargoConfig` from an already-parsed mapping.
    """
    defaults = WargoConfig()
    release_raw = _mapping(data, "release")
    github_raw = _mapping(data, "github")

    release = ReleaseSource(
        owner=_str(release_raw, "owner", defaults.release.owner),
        repo=_str(release_raw, "repo", defaults.release.repo),
        # An empty prefix is allowed: tags may be bare versions.
        tag_prefix=str(release_raw.get("tag_prefix", defaults.release.tag_prefix) or ""),
    )

    profile = _str(data, "profile", defaults.profile)
    if profile not in _PROFILES:
        raise ConfigError(f"`profile` must be one of {', '.join(_PROFILES)}, got {profile!r}.")

    bindgen_raw = data.get("wasm_bindgen_args")
    if bindgen_raw is None:
        bindgen_args = defaults.wasm_bindgen_args
    elif isinstance(bindgen_raw, list):
        bindgen_args = tuple(str(a) for a in bindgen_raw)
    else:
        raise ConfigError("`wasm_bindgen_args` must be a list when provided.")

    return WargoConfig(
        framework_crate=_str(data, "framework_crate", defaults.framework_crate),
        release=release,
        target=_str(data, "target", defaults.target),
        profile=profile,
        output_dir=_str(data, "output_dir", defaults.output_dir),
        api_base=_str(github_raw, "api_base", defaults.api_base),
        wasm_bindgen_args=bindgen_args,
    )


def load_config(project_dir: str | Path = ".") -> WargoConfig:
    """
    Load `wargo.yaml` from `project_dir`, falling back to defaults when absent.
    """
    path = Path(project_dir) / CONFIG_FILE_NAME
    if not path.exists():
        return WargoConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must be a mapping/object at the top level.")
    return parse_config(data)
