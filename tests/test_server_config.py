"""Tests for the serverDZ.cfg mission template patcher."""
import pytest

from dayz_dev_manager.core.errors import PatchError
from dayz_dev_manager.core.server_config import (
    apply_mission_template,
    read_mission_template,
    set_mission_template,
)
from dayz_dev_manager.core.workspace import ensure_structure


NESTED = (
    'hostname = "Test";\n'
    "\n"
    "class Missions\n"
    "{\n"
    "    class DayZ\n"
    "    {\n"
    '        template = "dayzOffline.chernarusplus";\n'
    "    };\n"
    "};\n"
)


def count_templates(text):
    return sum(1 for line in text.splitlines() if line.strip().lower().startswith("template"))


def test_creates_minimal_config_when_missing(tmp_path):
    cfg = tmp_path / "Servers" / "serverDZ.cfg"

    set_mission_template(cfg, "dayzOffline.enoch")

    text = cfg.read_text(encoding="utf-8")
    assert "class Missions" in text
    assert "class DayZ" in text
    assert count_templates(text) == 1
    assert read_mission_template(cfg) == "dayzOffline.enoch"


def test_patching_default_config_is_idempotent(tmp_path):
    cfg = ensure_structure(tmp_path)["Servers/serverDZ.cfg"]

    set_mission_template(cfg, "myMission.chernarusplus")
    once = cfg.read_bytes()
    set_mission_template(cfg, "myMission.chernarusplus")
    twice = cfg.read_bytes()

    assert once == twice
    assert count_templates(once.decode("utf-8")) == 1
    assert read_mission_template(cfg) == "myMission.chernarusplus"
    assert 'hostname = "DayZ Local Dev";' in once.decode("utf-8")


def test_replaces_existing_template_in_place():
    result = apply_mission_template(NESTED, "empty.alteria")

    assert result == NESTED.replace("dayzOffline.chernarusplus", "empty.alteria")


def test_collapses_duplicate_templates():
    text = NESTED.replace(
        '        template = "dayzOffline.chernarusplus";\n',
        '        template = "a";\n        template = "b"; // old\n',
    )

    result = apply_mission_template(text, "c")

    assert count_templates(result) == 1
    assert 'template = "c";' in result
    assert result == NESTED.replace("dayzOffline.chernarusplus", "c")


def test_missions_block_without_dayz_gets_nested_block():
    text = "maxPlayers = 10;\nclass Missions\n{\n};\n"

    result = apply_mission_template(text, "m.enoch")

    assert count_templates(result) == 1
    missions_at = result.index("class Missions")
    dayz_at = result.index("class DayZ")
    assert missions_at < dayz_at < result.rindex("};")
    assert apply_mission_template(result, "m.enoch") == result


def test_config_without_blocks_gets_missions_block_appended():
    text = 'hostname = "x";\n'

    result = apply_mission_template(text, "m.enoch")

    assert result.startswith('hostname = "x";\n\nclass Missions\n{\n')
    assert result.endswith("};\n")
    assert apply_mission_template(result, "m.enoch") == result


def test_block_names_are_case_insensitive():
    text = "CLASS missions\n{\n    class dayz\n    {\n    };\n};\n"

    result = apply_mission_template(text, "m.enoch")

    assert result.count("class") + result.count("CLASS") == 2
    assert '        template = "m.enoch";' in result


def test_crlf_line_endings_are_preserved(tmp_path):
    cfg = tmp_path / "serverDZ.cfg"
    cfg.write_bytes(NESTED.replace("\n", "\r\n").encode("utf-8"))

    set_mission_template(cfg, "m.enoch")

    data = cfg.read_bytes().decode("utf-8")
    assert "\r\n" in data
    assert "\n" not in data.replace("\r\n", "")
    assert count_templates(data) == 1


@pytest.mark.parametrize("name", ["", 'bad"name', "two\nlines"])
def test_invalid_mission_name_raises(tmp_path, name):
    with pytest.raises(PatchError):
        set_mission_template(tmp_path / "serverDZ.cfg", name)


def test_read_mission_template_missing_file(tmp_path):
    assert read_mission_template(tmp_path / "nope.cfg") is None


def test_non_utf8_bytes_survive_patching(tmp_path):
    """A Latin-1 hostname is kept byte for byte while the template changes."""
    cfg = tmp_path / "serverDZ.cfg"
    cfg.write_bytes(b'hostname = "M\xfcnchen";\n' + NESTED.split("\n", 1)[1].encode("utf-8"))

    set_mission_template(cfg, "dayzOffline.enoch")
    once = cfg.read_bytes()
    set_mission_template(cfg, "dayzOffline.enoch")

    assert once.startswith(b'hostname = "M\xfcnchen";\n')
    assert b'template = "dayzOffline.enoch";' in once
    assert cfg.read_bytes() == once
    assert read_mission_template(cfg) == "dayzOffline.enoch"
