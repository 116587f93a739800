"""
Mod Resolver
Resolves the selected mod names to folders and builds the ``-mod=`` argument.

Order is the server's load order: it is kept exactly as given and names are
never deduplicated, so a duplicated selection shows up in the launch line
instead of being silently masked.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

MOD_SEPARATOR = ";"


class ModOrigin(str, Enum):
    """Where a selected mod was found."""
    EXTERNAL_CONTENT = "external"   # Workshop / downloaded content
    LOCALLY_BUILT = "built"         # BuiltMods output
    UNRESOLVED = "unresolved"       # passed through by name


@dataclass(frozen=True)
class ModReference:
    """A selected mod after resolution."""
    name: str
    absolute_path: Optional[str]
    origin: ModOrigin

    @property
    def token(self) -> str:
        """Entry for the composite argument: the path, or the bare name."""
        return self.absolute_path if self.absolute_path else self.name

    @property
    def is_external(self) -> bool:
        """True for workshop content; unresolved names count as workshop for display."""
        return self.origin in (ModOrigin.EXTERNAL_CONTENT, ModOrigin.UNRESOLVED)


@dataclass
class ResolvedLoadOrder:
    """Result of :func:`resolve_load_order`."""
    composite_arg: str = ""
    workshop_names: List[str] = field(default_factory=list)
    built_names: List[str] = field(default_factory=list)
    references: List[ModReference] = field(default_factory=list)

    def __iter__(self):
        # Allows ``composite, workshop, built = resolve_load_order(...)``
        return iter((self.composite_arg, self.workshop_names, self.built_names))

    @property
    def unresolved(self) -> List[str]:
        return [r.name for r in self.references if r.origin == ModOrigin.UNRESOLVED]


def normalize_mod_name(name: str) -> str:
    """Return ``name`` with exactly one leading ``@``."""
    return "@" + name.strip().lstrip("@")


def resolve_mod(name: str, external_root: str | Path | None, built_root: str | Path | None) -> ModReference:
    """Resolve one mod name against the external and built roots."""
    canonical = normalize_mod_name(name)

    if external_root:
        candidate = os.path.join(str(external_root), canonical)
        if os.path.isdir(candidate):
            return ModReference(canonical, os.path.abspath(candidate), ModOrigin.EXTERNAL_CONTENT)

    if built_root:
        candidate = os.path.join(str(built_root), canonical)
        if os.path.isdir(candidate):
            return ModReference(canonical, os.path.abspath(candidate), ModOrigin.LOCALLY_BUILT)

    return ModReference(canonical, None, ModOrigin.UNRESOLVED)


def resolve_load_order(
    selected: Iterable[str],
    external_root: str | Path | None,
    built_root: str | Path | None,
) -> ResolvedLoadOrder:
    """
    Resolve the selected mods, in order, into the composite mod argument.

    Each name is looked up under ``external_root`` first, then under
    ``built_root``; names found in neither are passed through as-is and left
    to the game to resolve.
    Names that are empty once whitespace and ``@`` are stripped are skipped.

    Args:
        selected: Mod names in load order (with or without ``@``)
        external_root: Workshop content folder (may be empty)
        built_root: Locally built mods folder

    Returns:
        ResolvedLoadOrder; ``composite_arg`` is ``""`` when nothing is selected
    """
    result = ResolvedLoadOrder()
    for name in selected:
        if not name.strip().lstrip("@"):
            logger.warning("Skipping empty mod name %r", name)
            continue
        ref = resolve_mod(name, external_root, built_root)
        result.references.append(ref)
        if ref.is_external:
            result.workshop_names.append(ref.name)
        else:
            result.built_names.append(ref.name)

    result.composite_arg = MOD_SEPARATOR.join(ref.token for ref in result.references)

    if result.unresolved:
        logger.warning("Mods not found locally, passed by name: %s", ", ".join(result.unresolved))
    return result


def mod_argument(composite_arg: str) -> List[str]:
    """``-mod=`` flag for a composite argument; empty list when there are no mods."""
    if not composite_arg:
        return []
    return [f"-mod={composite_arg}"]


def scan_mod_folders(root: str | Path | None) -> List[str]:
    """
    Names of ``@*`` folders directly under ``root``.

    Returns:
        Folder names sorted case-insensitively; empty if the root is missing
    """
    if not root:
        return []
    root_path = Path(root)
    if not root_path.is_dir():
        return []
    names = [p.name for p in root_path.iterdir() if p.is_dir() and p.name.startswith("@")]
    return sorted(names, key=str.lower)
