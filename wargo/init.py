"""
init.py

Responsibility: the `wargo init` / `wargo new` pipelines.

`cargo init --lib` creates the crate, then the bundled wasm-rgame template adds the
entrypoint (`src/lib.rs`), the javascript glue (`src/bootstrap.rs`) and an example
delegate (`src/simple_box.rs`), and the framework dependencies are appended to
Cargo.toml.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, StrictUndefined

from wargo import manifest, toolchain
from wargo.config import WargoConfig
from wargo.errors import WargoError
from wargo.renderer import render_template_dir
from wargo.toolchain import CommandError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
PROJECT_TEMPLATE = "wasm-rgame"
REFERENCE_ENTRYPOINT = "https://github.com/DarrenTsung/wrg-snake/blob/master/src/lib.rs"


class InitError(WargoError):
    pass


def _append_dependencies(cargo_toml: Path, context: dict[str, object]) -> None:
    env = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=True)
    text = env.from_string((TEMPLATES_DIR / "cargo_toml.append.j2").read_text(encoding="utf-8")).render(**context)
    try:
        with cargo_toml.open("a", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as e:
        raise InitError(f"Failed to write dependencies into Cargo.toml, error: {e}") from e


def initialize_entrypoint(project_dir: str | Path = ".", name: str | None = None, *, config: WargoConfig | None = None) -> None:
    """
    Turn project_dir into a wasm-rgame project.
    """
    conf = config or WargoConfig()
    project_dir = Path(project_dir)

    logger.info("Initializing the project..")
    try:
        toolchain.cargo_init(project_dir, name=name)
    except CommandError as e:
        raise InitError(
            "Failed to initialize project with `cargo init`, does the project already exist?\n"
            f"You can reference the lib.rs file of `wrg-snake` to manually add the entrypoint:\n{REFERENCE_ENTRYPOINT}"
        ) from e
    logger.info("done!")

    project_name = manifest.project_name(project_dir)
    context = {
        "project_name": project_name,
        "built_project_name": manifest.built_project_name(project_name),
        "framework_crate": conf.framework_crate,
        "framework_module": manifest.built_project_name(conf.framework_crate),
        "output_dir": conf.output_dir,
    }

    logger.info("Adding in bootstrap files..")
    render_template_dir(
        template_dir=TEMPLATES_DIR / PROJECT_TEMPLATE,
        destination_dir=project_dir,
        context=context,
    )
    _append_dependencies(project_dir / "Cargo.toml", context)
    logger.info("done!")

    logger.info("Finished initializing project: %s successfully. Run `wargo build` next to get started!", project_name)


def new_project(path: str | Path, name: str | None = None, *, config: WargoConfig | None = None) -> Path:
    """
    Create a new directory at path and initialize it as a wasm-rgame project.
    """
    project_dir = Path(path)
    try:
        project_dir.mkdir(parents=True)
    except FileExistsError as e:
        raise InitError(f"Could not create directory at path: {project_dir}, it already exists") from e
    except OSError as e:
        raise InitError(f"Could not create directory at path: {project_dir}, error: {e}") from e

    initialize_entrypoint(project_dir, name, config=config)
    return project_dir
