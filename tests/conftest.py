"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

CARGO_LOCK = """\
[[package]]
name = "aho-corasick"
version = "0.6.4"
source = "registry+https://github.com/rust-lang/crates.io-index"
dependencies = [
 "memchr 2.0.1 (registry+https://github.com/rust-lang/crates.io-index)",
]

[[package]]
name = "my-game"
version = "0.1.0"
dependencies = [
 "wasm-rgame 0.3.1 (registry+https://github.com/rust-lang/crates.io-index)",
]

[[package]]
name = "wasm-rgame"
version = "0.3.1"
source = "registry+https://github.com/rust-lang/crates.io-index"

[metadata]
"checksum aho-corasick 0.6.4 (registry+https://github.com/rust-lang/crates.io-index)" = "d6531d44de723825aa81398a6415283229725a00fa30713812ab9323faa82fc4"
"""

CARGO_TOML = """\
[package]
name = "my-game"
version = "0.1.0"
authors = ["Someone <someone@example.invalid>"]

[dependencies]
"""


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """A cargo project directory with Cargo.toml and Cargo.lock."""
    (tmp_path / "Cargo.toml").write_text(CARGO_TOML, encoding="utf-8")
    (tmp_path / "Cargo.lock").write_text(CARGO_LOCK, encoding="utf-8")
    return tmp_path


@pytest.fixture
def cargo_lock_text() -> str:
    return CARGO_LOCK
