"""
toolchain.py

Responsibility: Run the native toolchain (`cargo`, `wasm-bindgen`) as subprocesses.

Every failure is raised as a CommandError carrying the step's context, the captured
stdout/stderr and the full command line, so the CLI can print it verbatim.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from wargo.errors import WargoError

logger = logging.getLogger(__name__)


class CommandError(WargoError):
    pass


def execute_command(command: str, args: Sequence[str], context: str, *, cwd: str | Path = ".") -> str:
    """
    Run `command args...` in `cwd` and return its stdout.
    """
    cmd = [command, *args]
    full_command = " ".join(cmd)
    logger.debug("Running `%s` in %s", full_command, cwd)
    try:
        result = subprocess.run(cmd, cwd=str(cwd), capture_output=True, text=True)
    except OSError as e:
        raise CommandError(f"Failed to execute, context: `{context}`, error: {e}\nFull command: `{full_command}`") from e

    if result.returncode != 0:
        raise CommandError(
            f"Command failed, context: `{context}`\n\n\n"
            f"Stdout:\n{result.stdout}\n\n\n"
            f"Stderr:\n{result.stderr}\n\n\n"
            f"Full command: `{full_command}`"
        )
    return result.stdout


def wasm_output_path(project_dir: str | Path, target: str, profile: str, module_name: str) -> Path:
    return Path(project_dir) / "target" / target / profile / f"{module_name}.wasm"


def cargo_build(project_dir: str | Path, *, target: str, profile: str) -> None:
    args = ["build", "--target", target]
    if profile == "release":
        args.append("--release")
    execute_command("cargo", args, f"Build project targeting {target}", cwd=project_dir)


def cargo_init(project_dir: str | Path, *, name: str | None = None) -> None:
    args = ["init", "--lib"]
    if name:
        args += ["--name", name]
    execute_command("cargo", args, "Initialize project with `cargo init --lib`", cwd=project_dir)


def wasm_bindgen(
    project_dir: str | Path,
    *,
    wasm_path: str | Path,
    module_name: str,
    out_dir: str | Path,
    extra_args: Sequence[str] = (),
) -> None:
    """
    Run wasm-bindgen on `wasm_path`, writing the bindings into `out_dir`.

    With `--no-modules` the generated JS exposes the module as a global named after
    the project so the release's html/js can find it.
    """
    args = [str(wasm_path), *extra_args]
    if "--no-modules" in extra_args and "--no-modules-global" not in extra_args:
        args += ["--no-modules-global", module_name]
    args += ["--out-dir", str(out_dir)]
    execute_command(
        "wasm-bindgen",
        args,
        f"Run wasm-bindgen, directing output to wasm-rgame `{out_dir}` folder",
        cwd=project_dir,
    )
