"""Tests for mod name resolution and the composite -mod argument."""
import os

import pytest

from dayz_dev_manager.core.mod_resolver import (
    ModOrigin,
    mod_argument,
    normalize_mod_name,
    resolve_load_order,
    scan_mod_folders,
)


@pytest.fixture
def roots(tmp_path):
    workshop = tmp_path / "!Workshop"
    built = tmp_path / "BuiltMods"
    for folder in (workshop / "@CF", workshop / "@Shared", built / "@MyMod", built / "@Shared"):
        folder.mkdir(parents=True)
    return workshop, built


def test_order_is_preserved_across_origins(roots):
    workshop, built = roots

    result = resolve_load_order(["@MyMod", "@CF"], workshop, built)

    assert result.composite_arg == ";".join([
        os.path.abspath(built / "@MyMod"),
        os.path.abspath(workshop / "@CF"),
    ])
    assert result.workshop_names == ["@CF"]
    assert result.built_names == ["@MyMod"]
    assert [r.origin for r in result.references] == [ModOrigin.LOCALLY_BUILT, ModOrigin.EXTERNAL_CONTENT]


def test_empty_selection():
    result = resolve_load_order([], "", "")

    assert result.composite_arg == ""
    assert result.workshop_names == []
    assert result.built_names == []
    assert mod_argument(result.composite_arg) == []


def test_workshop_copy_wins_over_built(roots):
    workshop, built = roots

    result = resolve_load_order(["Shared"], workshop, built)

    assert result.composite_arg == os.path.abspath(workshop / "@Shared")
    assert result.workshop_names == ["@Shared"]


def test_missing_workshop_root_falls_back_to_built(roots):
    _, built = roots

    result = resolve_load_order(["@Shared"], "", built)

    assert result.built_names == ["@Shared"]


def test_unresolved_name_passes_through(roots):
    workshop, built = roots

    result = resolve_load_order(["@CF", "Missing"], workshop, built)

    assert result.composite_arg.endswith(";@Missing")
    assert result.unresolved == ["@Missing"]
    assert result.workshop_names == ["@CF", "@Missing"]


def test_duplicates_are_kept(roots):
    workshop, built = roots

    composite, workshop_names, built_names = resolve_load_order(["@CF", "@CF"], workshop, built)

    assert composite.count(";") == 1
    assert workshop_names == ["@CF", "@CF"]
    assert built_names == []


def test_normalize_mod_name():
    assert normalize_mod_name("CF") == "@CF"
    assert normalize_mod_name("@CF") == "@CF"
    assert normalize_mod_name("@@CF ") == "@CF"


def test_mod_argument():
    assert mod_argument("a;b") == ["-mod=a;b"]


def test_scan_mod_folders(tmp_path):
    for name in ("@zeta", "@Alpha", "notamod"):
        (tmp_path / name).mkdir()
    (tmp_path / "@file.txt").write_text("x")

    assert scan_mod_folders(tmp_path) == ["@Alpha", "@zeta"]
    assert scan_mod_folders(tmp_path / "missing") == []
    assert scan_mod_folders("") == []


def test_empty_names_are_skipped(roots, caplog):
    """Blank entries never turn into a bare "@" token."""
    workshop, built = roots

    result = resolve_load_order(["@CF", "", "@", "  "], workshop, built)

    assert result.composite_arg == os.path.abspath(workshop / "@CF")
    assert len(result.references) == 1
    assert "Skipping empty mod name" in caplog.text
