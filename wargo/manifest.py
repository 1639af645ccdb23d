"""
manifest.py

Responsibility: Read the handful of fields wargo needs out of a cargo project.

- `Cargo.toml`: the package name (names the deploy directory and the wasm module).
- `Cargo.lock`: the resolved version of the framework crate (selects the asset release).

Both files are TOML; they are parsed with `tomllib` rather than pattern matched.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from semantic_version import Version

from wargo.errors import WargoError


class ManifestError(WargoError):
    pass


def _load_toml(path: Path, *, what: str) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot find / read {what} in project directory, error: {e}") from e
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Cannot parse {what}, error: {e}") from e


def project_name(project_dir: str | Path = ".") -> str:
    """
    Return `[package].name` from the project's Cargo.toml.
    """
    data = _load_toml(Path(project_dir) / "Cargo.toml", what="Cargo.toml")
    package = data.get("package")
    if not isinstance(package, dict):
        raise ManifestError("Cargo.toml has no [package] table.")
    name = str(package.get("name") or "").strip()
    if not name:
        raise ManifestError("Cargo.toml does not define `package.name`.")
    return name


def built_project_name(name: str) -> str:
    """
    Name of the compiled artifact: cargo turns dashes in the package name into underscores.
    """
    return name.replace("-", "_")


def find_version(package_name: str, cargo_lock: str) -> Version | None:
    """
    Return the locked version of `package_name`, or None when the package is not
    present or its version is not valid semver.

    Only the first matching `[[package]]` entry is considered.
    """
    try:
        data = tomllib.loads(cargo_lock)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Cannot parse Cargo.lock, error: {e}") from e

    for entry in data.get("package") or []:
        if not isinstance(entry, dict) or entry.get("name") != package_name:
            continue
        try:
            return Version(str(entry.get("version") or ""))
        except ValueError:
            return None
    return None


def locked_version(project_dir: str | Path, package_name: str) -> Version:
    """
    Read the project's Cargo.lock and return the version of `package_name`.
    """
    path = Path(project_dir) / "Cargo.lock"
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot find / read Cargo.lock in project directory, error: {e}") from e

    version = find_version(package_name, text)
    if version is None:
        raise ManifestError(f"Cannot find {package_name} package in the Cargo.lock file!")
    return version
