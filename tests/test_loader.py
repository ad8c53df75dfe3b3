from __future__ import annotations

import os
from pathlib import Path

import pytest

from adr_radar import loader
from adr_radar.errors import AdrNameError, AdrReadError


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_adrs_filters_and_sorts(tmp_path: Path) -> None:
    _write(tmp_path / "docs" / "adr-10.md", "Backend Language default: Rust")
    _write(tmp_path / "adr-2.org", "Backend Language trial: Rust")
    _write(tmp_path / "nested" / "deep" / "adr-7.md", "")
    _write(tmp_path / "adr-3.txt", "Backend Language retire: Rust")
    _write(tmp_path / "adr-4.MD", "Backend Language retire: Rust")
    _write(tmp_path / "notes-5.md", "Backend Language retire: Rust")
    (tmp_path / "adr-99.md").mkdir()

    adrs = loader.load_adrs(tmp_path)

    assert [adr.id for adr in adrs] == [2, 7, 10]
    assert adrs[0].path == tmp_path / "adr-2.org"
    assert [e.tech for e in adrs[0].events] == ["Rust"]
    assert adrs[1].events == ()


def test_duplicate_ids_keep_discovery_order(tmp_path: Path) -> None:
    _write(tmp_path / "a" / "adr-1.md", "S C default: first")
    _write(tmp_path / "b" / "adr-1.md", "S C default: second")
    _write(tmp_path / "adr-0.md", "")

    adrs = loader.load_adrs(tmp_path)

    assert [adr.id for adr in adrs] == [0, 1, 1]
    assert [adr.events[0].tech for adr in adrs[1:]] == ["first", "second"]


def test_malformed_adr_number_is_fatal(tmp_path: Path) -> None:
    _write(tmp_path / "adr-1.md", "S C default: ok")
    _write(tmp_path / "adr-x.md", "S C default: broken")

    with pytest.raises(AdrNameError) as excinfo:
        loader.load_adrs(tmp_path)
    assert excinfo.value.suffix == "x"


@pytest.mark.parametrize("suffix", ["", "-1", "1a", " 1", "1_000", "1.5"])
def test_parse_adr_id_rejects(suffix: str) -> None:
    with pytest.raises(AdrNameError):
        loader.parse_adr_id(Path(f"adr-{suffix}.md"), suffix)


def test_parse_adr_id_accepts_leading_zeros_and_plus() -> None:
    assert loader.parse_adr_id(Path("adr-007.md"), "007") == 7
    assert loader.parse_adr_id(Path("adr-+3.md"), "+3") == 3


def test_adr_suffix() -> None:
    assert loader.adr_suffix(Path("adr-12.md")) == "12"
    assert loader.adr_suffix(Path("x/adr-12.org")) == "12"
    assert loader.adr_suffix(Path("adr-12")) is None
    assert loader.adr_suffix(Path("ADR-12.md")) is None


def test_unreadable_file_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "adr-1.md"
    path.write_bytes(b"\xff\xfe\xfa not utf-8")

    with pytest.raises(AdrReadError):
        loader.load_adrs(tmp_path)


def test_missing_root(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        loader.load_adrs(tmp_path / "missing")


def test_unlistable_directory_is_fatal(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path / "adr-1.md", "S C default: a")
    _write(tmp_path / "locked" / "adr-2.md", "S C retire: a")
    real_scandir = os.scandir

    def scandir(path):  # type: ignore[no-untyped-def]
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(loader.os, "scandir", scandir)

    with pytest.raises(AdrReadError) as excinfo:
        loader.load_adrs(tmp_path)
    assert excinfo.value.path == tmp_path / "locked"


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores directory modes")
def test_unreadable_directory_mode_is_fatal(tmp_path: Path) -> None:
    _write(tmp_path / "adr-1.md", "S C default: a")
    locked = tmp_path / "locked"
    _write(locked / "adr-2.md", "S C retire: a")
    locked.chmod(0)
    try:
        with pytest.raises(AdrReadError):
            loader.load_adrs(tmp_path)
    finally:
        locked.chmod(0o755)


def test_dangling_adr_link_is_fatal(tmp_path: Path) -> None:
    _write(tmp_path / "adr-1.md", "S C default: a")
    (tmp_path / "adr-2.md").symlink_to(tmp_path / "gone.md")

    with pytest.raises(AdrReadError) as excinfo:
        loader.load_adrs(tmp_path)
    assert excinfo.value.path == tmp_path / "adr-2.md"


def test_symlinked_directories_are_followed(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    _write(tmp_path / "elsewhere" / "adr-5.md", "S C trial: b")
    (root / "decisions").symlink_to(tmp_path / "elsewhere", target_is_directory=True)

    adrs = loader.load_adrs(root)

    assert [adr.id for adr in adrs] == [5]
    assert adrs[0].path == root / "decisions" / "adr-5.md"
