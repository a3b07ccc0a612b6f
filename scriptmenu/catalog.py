#===============================================================================
#  Script_Menu | catalog.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Filesystem discovery of launchable scripts, menu label and icon derivation,
#  and search filtering over a scanned catalog.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import locale
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .constants import (
    DEFAULT_TOP_ICON,
    EXECUTABLE_ICON,
    FALLBACK_SCRIPT_ICON,
    ICON_SUFFIXES,
    INTERPRETER_ICONS,
    SCRIPT_SUFFIX,
)
from .models import (
    CatalogOptions,
    CatalogSnapshot,
    CustomIcon,
    ExecutableHintIcon,
    IconRef,
    NamedIcon,
    ScriptDescriptor,
)

logger = logging.getLogger(__name__)


def display_name_for(file_name: str, strip_extension: bool) -> str:
    if strip_extension:
        stem, dot, _ext = file_name.rpartition(".")
        return stem if dot and stem else file_name
    return file_name


def find_sibling_icon(directory: Path, file_name: str) -> Optional[Path]:
    """Return <basename>.svg or <basename>.png next to the script (svg wins)."""
    base = file_name[: -len(SCRIPT_SUFFIX)] if file_name.endswith(SCRIPT_SUFFIX) else file_name
    for suffix in ICON_SUFFIXES:
        candidate = directory / f"{base}{suffix}"
        if candidate.exists():
            return candidate
    return None


def read_interpreter(script: Path) -> str:
    """Interpreter named by the shebang line, "" if there is none.

    ``#!/usr/bin/env python3`` -> ``python3``; ``#!/bin/bash -e`` -> ``bash``.
    """
    try:
        with open(script, "rb") as f:
            first = f.readline(256)
    except OSError:
        return ""
    if not first.startswith(b"#!"):
        return ""
    parts = first[2:].decode("utf-8", errors="ignore").split()
    if not parts:
        return ""
    name = os.path.basename(parts[0])
    if name == "env":
        args = [p for p in parts[1:] if not p.startswith("-")]
        name = os.path.basename(args[0]) if args else ""
    return name


def executable_hint(script: Path) -> ExecutableHintIcon:
    interpreter = read_interpreter(script)
    if not interpreter:
        # A .sh without shebang is run by the shell
        return ExecutableHintIcon(interpreter="", icon_name=INTERPRETER_ICONS["sh"])
    icon_name = INTERPRETER_ICONS.get(interpreter)
    if icon_name is None:
        family = interpreter.rstrip("0123456789.")
        icon_name = INTERPRETER_ICONS.get(family, EXECUTABLE_ICON)
    return ExecutableHintIcon(interpreter=interpreter, icon_name=icon_name)


def resolve_icon(directory: Path, file_name: str, options: CatalogOptions) -> IconRef:
    """Pick the icon for one script.

    Resolution order:
      1) sibling <basename>.svg, then <basename>.png
      2) shebang hint (if enabled)
      3) configured default icon name
      4) built-in fallback
    """
    sibling = find_sibling_icon(directory, file_name)
    if sibling is not None:
        return CustomIcon(path=str(sibling))
    if options.shebang_icon:
        return executable_hint(directory / file_name)
    return NamedIcon(name=options.default_icon_name or FALLBACK_SCRIPT_ICON)


def _iter_script_names(directory: Path) -> Iterable[str]:
    try:
        for item in directory.iterdir():
            # is_file() follows symlinks and is False for dangling ones
            if item.name.endswith(SCRIPT_SUFFIX) and item.is_file():
                yield item.name
    except OSError as e:
        # Directory removed or unreadable mid-scan; the watcher will rescan.
        logger.debug("Scan of %s interrupted: %s", directory, e)


def scan_scripts(directory, options: Optional[CatalogOptions] = None) -> CatalogSnapshot:
    """Scan the scripts directory and return descriptors sorted by file name.

    A blank or missing directory is a normal state and yields an empty
    snapshot.
    """
    options = options or CatalogOptions()
    if not directory:
        return ()
    folder = Path(directory)
    if not folder.is_dir():
        return ()

    # Case-folded so ordering does not depend on the process locale being set
    names = sorted(_iter_script_names(folder), key=lambda n: (locale.strxfrm(n.lower()), n))

    scripts: List[ScriptDescriptor] = []
    for name in names:
        scripts.append(
            ScriptDescriptor(
                file_name=name,
                display_name=display_name_for(name, options.strip_extension),
                icon=resolve_icon(folder, name, options),
                path=str(folder / name),
            )
        )

    logger.debug("Scanned %s: %d script(s)", folder, len(scripts))
    return tuple(scripts)


def filter_scripts(snapshot: CatalogSnapshot, query: str) -> Set[str]:
    """File names whose label contains ``query`` (case-insensitive)."""
    needle = (query or "").lower()
    return {s.file_name for s in snapshot if needle in s.display_name.lower()}


def resolve_top_icon(use_custom: bool, icon_name: str) -> IconRef:
    """Icon shown on the tray/panel button.

    A value that starts with "/" or ends with .svg/.png is a file path and is
    only used when the file exists.
    """
    default = NamedIcon(name=DEFAULT_TOP_ICON)
    if not use_custom:
        return default
    name = (icon_name or "").strip()
    if not name:
        return default
    if name.startswith("/") or name.endswith(ICON_SUFFIXES):
        return CustomIcon(path=name) if Path(name).exists() else default
    return NamedIcon(name=name)
