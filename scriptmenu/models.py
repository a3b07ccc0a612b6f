#===============================================================================
#  Script_Menu | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models used across the script menu: script descriptors, icon
#  references, launch results and the entries handed to the menu renderer.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Tuple, Union


@dataclass(frozen=True)
class CustomIcon:
    """Image file placed next to the script (<basename>.svg or .png)."""
    path: str


@dataclass(frozen=True)
class NamedIcon:
    """Themed icon looked up by name."""
    name: str


@dataclass(frozen=True)
class ExecutableHintIcon:
    """Icon derived from the script's shebang line."""
    interpreter: str    # "python3", "bash", ... ("" when there is no shebang)
    icon_name: str      # themed mime icon for that interpreter


IconRef = Union[CustomIcon, NamedIcon, ExecutableHintIcon]


@dataclass(frozen=True)
class ScriptDescriptor:
    """Represents one launchable script discovered in the scripts directory."""
    file_name: str      # "deploy.sh"
    display_name: str   # "deploy" or "deploy.sh" depending on the strip option
    icon: IconRef
    path: str           # directory + "/" + file_name


CatalogSnapshot = Tuple[ScriptDescriptor, ...]


@dataclass(frozen=True)
class CatalogOptions:
    strip_extension: bool = False
    shebang_icon: bool = False
    default_icon_name: str = ""

    @classmethod
    def from_settings(cls, settings) -> "CatalogOptions":
        return cls(
            strip_extension=settings.get_boolean("strip"),
            shebang_icon=settings.get_boolean("shebang-icon"),
            default_icon_name=settings.get_string("default-icon"),
        )


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of one finished script run."""
    script: str
    stdout: str
    stderr: str
    exit_status: int
    completed_at: datetime


class LaunchError(Exception):
    """Raised (through the launch future) when a script could not be started."""

    def __init__(self, script: str, message: str):
        super().__init__(message)
        self.script = script
        self.message = message


@dataclass(frozen=True)
class MenuEntry:
    """One row for the menu renderer."""
    file_name: str
    display_name: str
    icon: IconRef
    on_activate: Callable[[], object]
