"""
choose_version.py

Responsibility: pick the release whose version best matches the framework version
a project is built against.

Given a main version and a list of items, the chosen item is the one with the
greatest version that does not exceed the main version. Items whose version cannot
be derived are ignored.

For example: if the main version is 0.3.1 and the versions are [0.2.0, 0.3.0],
then 0.3.0 is chosen because it is the most up-to-date compatible one.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from semantic_version import Version

T = TypeVar("T")


def choose_version_by_key(
    main_version: Version,
    items: Sequence[T],
    key_fn: Callable[[T], Version | None],
) -> T | None:
    """
    Return the item with the greatest version <= main_version, or None.

    `items` must not be empty: an empty list means nothing was listed at all,
    which callers must report separately from "nothing matched".

    Equal versions keep their input order, so the earliest item wins a tie.
    """
    if not items:
        raise AssertionError("choose_version_by_key requires at least one item")

    filtered: list[tuple[T, Version]] = []
    for item in items:
        version = key_fn(item)
        if version is not None and version <= main_version:
            filtered.append((item, version))

    if not filtered:
        return None

    # sorted() is stable with reverse=True as well.
    ranked = sorted(filtered, key=lambda pair: pair[1].precedence_key, reverse=True)
    return ranked[0][0]


def version_from_tag(tag: str, prefix: str = "v") -> Version | None:
    """
    Parse a release tag like "v0.1.0" into a Version.

    Returns None when the tag lacks the prefix or the remainder is not strict semver.
    """
    if not tag.startswith(prefix):
        return None
    try:
        return Version(tag[len(prefix) :])
    except ValueError:
        return None
