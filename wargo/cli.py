"""
cli.py

Responsibility: CLI entrypoint for wargo.

Commands:
- `build`: build the current project and pack the wasm output with the wasm-rgame-js
  html/js into `target/wasm-rgame/<project>/`
- `init`: initialize the current directory as a wasm-rgame project
- `new`: create a new cargo package at <path> and initialize it

This module only parses arguments, configures logging and maps errors to exit codes.
The pipelines live in `build.py` and `init.py`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from wargo import __version__
from wargo.build import BuildProjectConfig, build_project
from wargo.config import load_config
from wargo.errors import WargoError
from wargo.init import initialize_entrypoint, new_project

logger = logging.getLogger("wargo")


def _configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("wargo")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False


def build_cmd(args: argparse.Namespace) -> int:
    project_dir = Path(args.project_dir)
    config = load_config(project_dir).with_overrides(
        github_token=args.github_token or os.environ.get("GITHUB_TOKEN"),
        profile="release" if args.release else None,
    )
    build_project(
        BuildProjectConfig(
            js_path=Path(args.js_path) if args.js_path else None,
            project_dir=project_dir,
            config=config,
        )
    )
    return 0


def init_cmd(args: argparse.Namespace) -> int:
    project_dir = Path(".")
    initialize_entrypoint(project_dir, args.name, config=load_config(project_dir))
    return 0


def new_cmd(args: argparse.Namespace) -> int:
    new_project(args.path, args.name, config=load_config(Path(".")))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wargo", description="Tool used with wasm-rgame projects.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser(
        "build",
        help="Build the current project, packing the output wasm file with all the additional Javascript / HTML",
    )
    b.add_argument(
        "--js-path",
        default=None,
        help="Use a local path for the js files (default: download the latest matching release)",
    )
    b.add_argument("--project-dir", default=".", help="Cargo project directory (default: current directory)")
    b.add_argument("--github-token", default=None, help="GitHub token (or set env GITHUB_TOKEN); optional")
    b.add_argument("--release", action="store_true", help="Build with the release profile")
    b.set_defaults(func=build_cmd)

    i = sub.add_parser("init", help="Initialize the current directory as a wasm-rgame project")
    i.add_argument("--name", default=None, help="Set the resulting package name (default: the directory name)")
    i.set_defaults(func=init_cmd)

    n = sub.add_parser("new", help="Create a new cargo package at <path> and initialize it")
    n.add_argument("path", help="The path to create the new cargo package at")
    n.add_argument("--name", default=None, help="Set the resulting package name (default: the directory name)")
    n.set_defaults(func=new_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))
    try:
        return int(args.func(args))
    except WargoError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
