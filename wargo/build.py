"""
build.py

Responsibility: the `wargo build` pipeline.

1) Read the project name from Cargo.toml and the wasm-rgame version from Cargo.lock
2) Pick the wasm-rgame-js release matching that version and unpack it
   (or use a local `--js-path` checkout instead)
3) cargo build for the wasm target
4) Reset the deploy directory and copy the release assets into it
5) wasm-bindgen the built module into the deploy directory
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from semantic_version import Version

from wargo import manifest, toolchain
from wargo.archive import unpack_tarball
from wargo.choose_version import choose_version_by_key, version_from_tag
from wargo.config import WargoConfig
from wargo.errors import WargoError
from wargo.github_client import GitHubClient, ReleaseInfo
from wargo.renderer import copy_release_assets

logger = logging.getLogger(__name__)


class BuildError(WargoError):
    pass


@dataclass(frozen=True)
class BuildProjectConfig:
    # Local directory holding the js/html files; skips the release download.
    js_path: Path | None = None
    project_dir: Path = Path(".")
    config: WargoConfig = field(default_factory=WargoConfig)


def choose_release(
    releases: list[ReleaseInfo],
    framework_version: Version,
    *,
    tag_prefix: str = "v",
) -> ReleaseInfo:
    """
    Return the release matching `framework_version`, raising BuildError when none does.
    """
    if not releases:
        raise BuildError("Found no releases for wasm-rgame-js!")

    chosen = choose_version_by_key(
        framework_version,
        releases,
        lambda r: version_from_tag(r.tag_name, tag_prefix),
    )
    if chosen is None:
        raise BuildError(f"Found no valid releases for wasm-rgame version {framework_version}!")
    return chosen


def _fetch_release_assets(cfg: BuildProjectConfig, client: GitHubClient, tmp_dir: Path) -> Path:
    conf = cfg.config
    framework_version = manifest.locked_version(cfg.project_dir, conf.framework_crate)
    logger.info("The current project is using %s version: `%s`.", conf.framework_crate, framework_version)

    releases = client.list_releases(conf.release.owner, conf.release.repo)
    release = choose_release(releases, framework_version, tag_prefix=conf.release.tag_prefix)
    logger.info("Found valid release version `%s` for %s!", release.tag_name, conf.release.repo)

    archive_path = client.download(release.tarball_url, tmp_dir / "release.tar.gz")
    return unpack_tarball(archive_path, tmp_dir / "unpacked")


def build_project(cfg: BuildProjectConfig, *, client: GitHubClient | None = None) -> Path:
    """
    Build the project and return the deploy directory.
    """
    conf = cfg.config
    project_dir = Path(cfg.project_dir).resolve()
    project_name = manifest.project_name(project_dir)
    module_name = manifest.built_project_name(project_name)

    with tempfile.TemporaryDirectory(prefix="wargo-") as tmp:
        if cfg.js_path is not None:
            assets_dir = Path(cfg.js_path)
            if not assets_dir.is_dir():
                raise BuildError(f"--js-path does not point to a directory: {assets_dir}")
            logger.info("Using local js files at %s.", assets_dir)
        else:
            if client is None:
                client = GitHubClient(conf.github_token, api_base=conf.api_base)
            assets_dir = _fetch_release_assets(cfg, client, Path(tmp))

        logger.info("Building the project, this may take some time..")
        # Must run before the deploy directory is reset.
        toolchain.cargo_build(project_dir, target=conf.target, profile=conf.profile)
        logger.info("done!")

        target_dir = project_dir / conf.output_dir / project_name
        if target_dir.exists():
            try:
                shutil.rmtree(target_dir)
            except OSError as e:
                raise BuildError(f"Failed removing existing wasm-rgame target directory, error: {e}") from e
        target_dir.mkdir(parents=True)

        result = copy_release_assets(source_dir=assets_dir, destination_dir=target_dir, project_name=module_name)
        logger.debug(
            "Copied %d asset files (%d with project name)",
            result.copied_files + result.rendered_files,
            result.rendered_files,
        )

    logger.info("Running wasm-bindgen, this may take some time..")
    toolchain.wasm_bindgen(
        project_dir,
        wasm_path=toolchain.wasm_output_path(project_dir, conf.target, conf.profile, module_name),
        module_name=module_name,
        out_dir=target_dir,
        extra_args=conf.wasm_bindgen_args,
    )
    logger.info("done!")

    logger.info(
        "Finished building project: %s successfully. View the deployed project at %s.",
        project_name,
        target_dir / "index.html",
    )
    return target_dir
