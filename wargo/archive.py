"""
archive.py

Responsibility: Unpack a downloaded release tarball.

GitHub tarballs hold exactly one top-level directory (`<owner>-<repo>-<sha>/`);
`unpack_tarball` returns that directory so callers never guess its name.
"""

from __future__ import annotations

import tarfile
from pathlib import Path

from wargo.errors import WargoError


class ArchiveError(WargoError):
    pass


def unpack_tarball(archive_path: str | Path, destination: str | Path) -> Path:
    """
    Extract a (gzipped) tar archive into `destination` and return its single top-level directory.
    """
    dest = Path(destination)
    dest.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(archive_path, "r:*") as archive:
            archive.extractall(dest, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise ArchiveError(f"Could not unpack archive into the temporary directory, error: {e}") from e

    entries = sorted(dest.iterdir())
    if len(entries) != 1 or not entries[0].is_dir():
        names = ", ".join(p.name for p in entries) or "<empty>"
        raise ArchiveError(f"Expected a single top-level directory in the release archive, found: {names}")
    return entries[0]
