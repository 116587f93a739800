"""
Server Config Patcher
Idempotently sets the mission template inside serverDZ.cfg.

This is a structural patch of a loosely formatted config language, not a
parser: blocks are found by a case-insensitive search for their opener
(``class DayZ`` / ``class Missions``) and the directive is inserted right
after the next opening brace. Directives written on the same line as other
statements, or blocks named by prefix (``class DayZExpansion``), are outside
what it understands.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from dayz_dev_manager.core.errors import PatchError

logger = logging.getLogger(__name__)

INDENT = "    "

# A full-line template directive, including its line break
_TEMPLATE_LINE = re.compile(
    r'^[ \t]*template[ \t]*=[ \t]*"[^"\r\n]*"[ \t]*;[ \t]*(?://[^\r\n]*)?(?:\r?\n|\Z)',
    re.IGNORECASE | re.MULTILINE,
)
_TEMPLATE_VALUE = re.compile(
    r'^[ \t]*template[ \t]*=[ \t]*"([^"\r\n]*)"[ \t]*;',
    re.IGNORECASE | re.MULTILINE,
)
_DAYZ_BLOCK = re.compile(r'class\s+DayZ\b', re.IGNORECASE)
_MISSIONS_BLOCK = re.compile(r'class\s+Missions\b', re.IGNORECASE)

BASELINE_SETTINGS = (
    'hostname = "DayZ Local Dev";',
    'password = "";',
    'passwordAdmin = "";',
    'enableWhitelist = 0;',
    'maxPlayers = 60;',
    'BattlEye = 0;',
    'verifySignatures = 0;',
    'allowFilePatching = 1;',
    'forceSameBuild = 1;',
)


def template_directive(mission_name: str) -> str:
    return f'template = "{mission_name}";'


def _dayz_block(mission_name: str, indent: str = "") -> list[str]:
    return [
        f"{indent}class DayZ",
        f"{indent}{{",
        f"{indent}{INDENT}{template_directive(mission_name)}",
        f"{indent}}};",
    ]


def _missions_block(mission_name: str) -> list[str]:
    return ["class Missions", "{", *_dayz_block(mission_name, INDENT), "};"]


def minimal_server_config(mission_name: str, newline: str = "\n") -> str:
    """Complete minimal serverDZ.cfg selecting ``mission_name``."""
    lines = [*BASELINE_SETTINGS, "", *_missions_block(mission_name)]
    return newline.join(lines) + newline


def apply_mission_template(text: str, mission_name: str) -> str:
    """
    Return ``text`` with exactly one template directive for ``mission_name``.

    Pure text transform behind :func:`set_mission_template`.
    """
    newline = "\r\n" if "\r\n" in text else "\n"

    # Drop every existing directive so repeated selections never accumulate
    text = _TEMPLATE_LINE.sub("", text)

    dayz = _DAYZ_BLOCK.search(text)
    if dayz:
        brace = text.find("{", dayz.end())
        if brace >= 0:
            insertion = newline + INDENT * 2 + template_directive(mission_name)
            return text[:brace + 1] + insertion + text[brace + 1:]

    missions = _MISSIONS_BLOCK.search(text)
    if missions:
        brace = text.find("{", missions.end())
        if brace >= 0:
            insertion = newline + newline.join(_dayz_block(mission_name, INDENT))
            return text[:brace + 1] + insertion + text[brace + 1:]

    block = newline.join(_missions_block(mission_name)) + newline
    head = text.rstrip()
    if not head:
        return block
    return head + newline + newline + block


def set_mission_template(config_file: str | Path, mission_name: str) -> None:
    """
    Select ``mission_name`` as the active mission template in ``config_file``.

    Creates a minimal config (and its folder) when the file does not exist.
    Calling it twice with the same name leaves the file byte-identical to
    calling it once.

    Raises:
        PatchError: invalid mission name, or the file cannot be read/written.
    """
    if not mission_name or '"' in mission_name or "\n" in mission_name or "\r" in mission_name:
        raise PatchError(f"Invalid mission name: {mission_name!r}")

    path = Path(config_file)
    try:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(minimal_server_config(mission_name))
            logger.info("Created %s with template \"%s\"", path, mission_name)
            return

        # Bytes that are not UTF-8 (ANSI-saved hostnames) round-trip unchanged
        with open(path, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
            text = f.read()

        patched = apply_mission_template(text, mission_name)
        with open(path, 'w', encoding='utf-8', errors='surrogateescape', newline='') as f:
            f.write(patched)
    except OSError as e:
        raise PatchError(f"Could not update server config: {e}", str(path)) from e
    except UnicodeError as e:
        raise PatchError(f"Could not encode server config: {e}", str(path)) from e

    logger.info("Set mission template \"%s\" in %s", mission_name, path)


def read_mission_template(config_file: str | Path) -> Optional[str]:
    """Return the first template name in ``config_file``, or None."""
    path = Path(config_file)
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding='utf-8', errors='ignore')
    except OSError:
        return None
    match = _TEMPLATE_VALUE.search(text)
    return match.group(1) if match else None
