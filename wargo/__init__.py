"""
wargo package

This package implements wargo, the build tool used with wasm-rgame projects.

Key responsibilities are split across modules:
- `choose_version.py`: pick the asset release matching the project's wasm-rgame version
- `manifest.py`: read the package name (Cargo.toml) and locked versions (Cargo.lock)
- `config.py`: optional per-project settings (`wargo.yaml`)
- `github_client.py`: isolated GitHub REST API interactions (release listing / download)
- `archive.py`: unpack downloaded release tarballs
- `renderer.py`: asset copy with `$PROJECT_NAME` substitution, Jinja2 project templates
- `toolchain.py`: cargo / wasm-bindgen subprocesses
- `build.py` / `init.py`: the `build`, `init` and `new` pipelines
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
