import itertools
import subprocess
import sys
from pathlib import Path

import pytest
from semantic_version import Version

from wargo.choose_version import choose_version_by_key, version_from_tag


def _parse(s: str) -> Version | None:
    try:
        return Version(s)
    except ValueError:
        return None


def test_chooses_latest() -> None:
    chosen = choose_version_by_key(Version("0.3.1"), ["0.2.0", "0.3.0"], _parse)
    assert chosen == "0.3.0"


def test_picks_matching_if_possible() -> None:
    chosen = choose_version_by_key(Version("0.3.1"), ["0.2.0", "0.3.0", "0.3.1", "0.5.2"], _parse)
    assert chosen == "0.3.1"


def test_no_matching() -> None:
    chosen = choose_version_by_key(Version("0.1.1"), ["0.2.0", "0.3.0", "0.3.1", "0.5.2"], _parse)
    assert chosen is None


def test_ignores_items_without_version() -> None:
    chosen = choose_version_by_key(Version("0.3.1"), ["not-a-version", "0.3.0"], _parse)
    assert chosen == "0.3.0"


def test_all_items_without_version() -> None:
    assert choose_version_by_key(Version("0.3.1"), ["nope", "also-nope"], _parse) is None


def test_tie_keeps_input_order() -> None:
    first = {"tag": "0.3.0", "id": 1}
    second = {"tag": "0.3.0", "id": 2}
    chosen = choose_version_by_key(Version("0.3.1"), [first, second], lambda i: _parse(i["tag"]))
    assert chosen is first


def test_tie_ignores_build_metadata() -> None:
    chosen = choose_version_by_key(Version("0.3.1"), ["0.3.0+b", "0.3.0+a", "0.2.9"], _parse)
    assert chosen == "0.3.0+b"


def test_prerelease_sorts_below_release() -> None:
    assert choose_version_by_key(Version("1.0.0"), ["1.0.0-rc.1", "1.0.0"], _parse) == "1.0.0"
    assert choose_version_by_key(Version("1.0.0-rc.2"), ["1.0.0", "1.0.0-rc.1"], _parse) == "1.0.0-rc.1"


def test_input_order_is_irrelevant_for_distinct_versions() -> None:
    items = ["0.1.0", "0.3.1", "0.2.5", "0.4.0"]
    for perm in itertools.permutations(items):
        assert choose_version_by_key(Version("0.3.1"), list(perm), _parse) == "0.3.1"


def test_empty_items_is_a_programming_error() -> None:
    with pytest.raises(AssertionError):
        choose_version_by_key(Version("0.3.1"), [], _parse)


def test_does_not_mutate_inputs() -> None:
    reference = Version("0.3.1")
    items = ["0.5.0", "0.2.0", "0.3.0"]
    choose_version_by_key(reference, items, _parse)
    assert items == ["0.5.0", "0.2.0", "0.3.0"]
    assert reference == Version("0.3.1")


def test_key_fn_called_once_per_item() -> None:
    calls: list[str] = []

    def key(s: str) -> Version | None:
        calls.append(s)
        return _parse(s)

    choose_version_by_key(Version("0.3.1"), ["0.2.0", "x", "0.3.0"], key)
    assert calls == ["0.2.0", "x", "0.3.0"]


def test_selection_is_bounded_and_maximal() -> None:
    pool = ["0.1.0", "0.2.0", "0.2.1", "0.3.0", "0.3.1", "0.4.0", "bad", "1.0.0-alpha"]
    for reference in ("0.0.1", "0.2.0", "0.3.5", "1.0.0"):
        ref = Version(reference)
        for combo in itertools.combinations(pool, 3):
            chosen = choose_version_by_key(ref, list(combo), _parse)
            eligible = [v for v in (_parse(s) for s in combo) if v is not None and v <= ref]
            if not eligible:
                assert chosen is None
                continue
            assert chosen is not None
            assert _parse(chosen) <= ref
            assert _parse(chosen) == max(eligible)


@pytest.mark.parametrize(
    ("tag", "prefix", "expected"),
    [
        ("v0.1.0", "v", Version("0.1.0")),
        ("v1.2.3-rc.1", "v", Version("1.2.3-rc.1")),
        ("0.1.0", "", Version("0.1.0")),
        ("release-0.1.0", "release-", Version("0.1.0")),
    ],
)
def test_version_from_tag(tag: str, prefix: str, expected: Version) -> None:
    assert version_from_tag(tag, prefix) == expected


@pytest.mark.parametrize("tag", ["0.1.0", "vnext", "v0.1", "", "latest"])
def test_version_from_tag_rejects(tag: str) -> None:
    assert version_from_tag(tag) is None


def test_empty_items_fails_under_optimized_python() -> None:
    code = (
        "from semantic_version import Version\n"
        "from wargo.choose_version import choose_version_by_key\n"
        "choose_version_by_key(Version('0.3.1'), [], lambda s: None)\n"
    )
    repo_root = Path(__file__).resolve().parents[1]
    result = subprocess.run([sys.executable, "-O", "-c", code], cwd=repo_root, capture_output=True, text=True)
    assert result.returncode != 0
    assert "AssertionError" in result.stderr
