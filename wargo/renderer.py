"""
renderer.py

Responsibility: Put files into a project or a deploy directory.

- `copy_release_assets`: merge the unpacked wasm-rgame-js release into the deploy
  directory, replacing the `$PROJECT_NAME` token with the wasm module name.
- `render_template_dir`: render the bundled Jinja2 project template (used by `init`).

Both walk their sources in sorted order so output is deterministic, and both copy
binary files byte-for-byte.

This module intentionally does NOT know about GitHub, cargo, or CLI parsing.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined

from wargo.errors import WargoError

PROJECT_NAME_TOKEN = "$PROJECT_NAME"


class RenderError(WargoError):
    pass


@dataclass(frozen=True)
class RenderResult:
    rendered_files: int
    copied_files: int


def _read_text(path: Path) -> str | None:
    """
    Return the file's UTF-8 text with line endings untouched, or None for binary files.
    """
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except UnicodeDecodeError:
        return None


def _iter_files(root: Path) -> list[Path]:
    """
    Return all files under root, ordered by their relative posix path.
    """
    files: list[Path] = []
    for dirpath, _dirs, filenames in os.walk(root):
        dir_path = Path(dirpath)
        for name in filenames:
            files.append(dir_path / name)
    files.sort(key=lambda p: p.relative_to(root).as_posix())
    return files


def _copy_with_token(src: Path, dst: Path, project_name: str) -> bool:
    """
    Copy src to dst, substituting the project name token. Returns True if substituted.
    """
    dst.parent.mkdir(parents=True, exist_ok=True)
    text = _read_text(src)
    if text is None or PROJECT_NAME_TOKEN not in text:
        shutil.copy2(src, dst)
        return False
    # newline="" on both ends keeps the asset's line endings as authored.
    with dst.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text.replace(PROJECT_NAME_TOKEN, project_name))
    shutil.copystat(src, dst)
    return True


def copy_release_assets(
    *,
    source_dir: str | Path,
    destination_dir: str | Path,
    project_name: str,
) -> RenderResult:
    """
    Copy every top-level, non-hidden entry of source_dir into destination_dir.

    Directories are copied recursively. `$PROJECT_NAME` is replaced by project_name in
    text files; `rendered_files` counts the files where a replacement happened.
    """
    src_dir = Path(source_dir)
    dst_dir = Path(destination_dir)
    if not src_dir.is_dir():
        raise RenderError(f"Release asset directory not found: {src_dir}")
    dst_dir.mkdir(parents=True, exist_ok=True)

    rendered = 0
    copied = 0
    try:
        for entry in sorted(src_dir.iterdir(), key=lambda p: p.name):
            # ignore hidden files (.gitignore, .github, ...)
            if entry.name.startswith("."):
                continue
            sources = _iter_files(entry) if entry.is_dir() else [entry]
            for src in sources:
                dst = dst_dir / src.relative_to(src_dir)
                if _copy_with_token(src, dst, project_name):
                    rendered += 1
                else:
                    copied += 1
    except OSError as e:
        raise RenderError(f"Failed to copy over unpacked data from {src_dir} to {dst_dir}, error: {e}") from e

    return RenderResult(rendered_files=rendered, copied_files=copied)


def render_template_dir(
    *,
    template_dir: str | Path,
    destination_dir: str | Path,
    context: dict[str, Any],
) -> RenderResult:
    """
    Render/copy a template directory into destination_dir.

    - Files ending in `.j2` are rendered with Jinja2 and written without the suffix.
    - Other files are copied as-is.
    - Existing destination files are overwritten.
    """
    tpl_dir = Path(template_dir).resolve()
    dst_dir = Path(destination_dir).resolve()

    if not tpl_dir.is_dir():
        raise RenderError(f"Template directory not found: {tpl_dir}")

    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )

    rendered = 0
    copied = 0

    for src_path in _iter_files(tpl_dir):
        rel = src_path.relative_to(tpl_dir)
        dst_path = dst_dir / rel
        dst_path.parent.mkdir(parents=True, exist_ok=True)

        if src_path.suffix != ".j2":
            shutil.copy2(src_path, dst_path)
            copied += 1
            continue

        dst_path = dst_path.with_suffix("")
        try:
            out = env.from_string(src_path.read_text(encoding="utf-8")).render(**context)
        except Exception as e:  # noqa: BLE001 - surface as RenderError
            raise RenderError(f"Failed rendering template file: {rel}") from e
        dst_path.write_text(out, encoding="utf-8", newline="\n")
        shutil.copystat(src_path, dst_path)
        rendered += 1

    return RenderResult(rendered_files=rendered, copied_files=copied)
