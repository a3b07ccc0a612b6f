#===============================================================================
#  Script_Menu | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Load/save of persistent script menu settings (scripts path, icon options,
#  notification and run-log toggles) and a live, signal-emitting view of them.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from PySide6.QtCore import QFileSystemWatcher, QObject, QTimer, Signal

from .constants import APP_NAME, SETTINGS_DIR_NAME, SETTINGS_FILE_NAME, SETTINGS_RELOAD_MS

logger = logging.getLogger(__name__)


def default_settings() -> Dict[str, Any]:
    return {
        "path": "",                     # scripts directory
        "strip": False,                 # drop ".sh" from menu labels
        "shebang-icon": False,          # icon from the script's interpreter
        "default-icon": "",             # themed icon name when no other applies
        "notify": True,                 # notification when a script finishes
        "log": False,                   # append runs to ~/.scriptmenu.log
        "use-custom-top-icon": False,
        "top-icon-name": "",            # icon name or path to an image file
    }


def default_settings_path(home: Optional[Path] = None) -> Path:
    base = Path(home) if home else Path.home()
    return base / SETTINGS_DIR_NAME / APP_NAME / SETTINGS_FILE_NAME


def load_settings(settings_path: Path) -> Dict[str, Any]:
    """Load settings from disk (or create defaults)."""
    d = default_settings()
    if not settings_path.exists():
        return d
    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Unreadable settings file %s, using defaults", settings_path)
        return d
    if not isinstance(data, dict):
        return d
    for k in d:
        if k in data and isinstance(data[k], type(d[k])):
            d[k] = data[k]
    return d


def save_settings(settings_path: Path, settings: Dict[str, Any]) -> None:
    """Persist settings to disk."""
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(settings, indent=2), encoding="utf-8")


class Settings(QObject):
    """Key/value settings backed by a JSON file.

    The file is watched, so edits made by another process (the preferences
    window) are picked up without a restart; ``reload()`` can also be called
    directly before a scan or launch. ``changed`` carries the key that was
    modified.
    """

    changed = Signal(str)

    def __init__(self, settings_path: Optional[Path] = None, parent=None):
        super().__init__(parent)
        self.settings_path = Path(settings_path) if settings_path else default_settings_path()
        self._values = load_settings(self.settings_path)

        self._reload_timer = QTimer(self)
        self._reload_timer.setSingleShot(True)
        self._reload_timer.setInterval(SETTINGS_RELOAD_MS)
        self._reload_timer.timeout.connect(self.reload)

        self._file_watcher = QFileSystemWatcher(self)
        self._file_watcher.fileChanged.connect(self._on_file_changed)
        self._file_watcher.directoryChanged.connect(self._on_file_changed)
        self._watch_file()

    def _watch_file(self) -> None:
        # Atomic rewrites replace the inode and drop it from the watcher, so
        # both the file and its folder are (re-)added whenever they exist.
        folder = self.settings_path.parent
        if folder.is_dir() and str(folder) not in self._file_watcher.directories():
            self._file_watcher.addPath(str(folder))
        if self.settings_path.is_file() and str(self.settings_path) not in self._file_watcher.files():
            self._file_watcher.addPath(str(self.settings_path))

    def _on_file_changed(self, _path: str = "") -> None:
        self._reload_timer.start()

    def get_string(self, key: str) -> str:
        value = self._values.get(key, "")
        return value if isinstance(value, str) else ""

    def get_boolean(self, key: str) -> bool:
        return bool(self._values.get(key, False))

    def set_value(self, key: str, value: Any) -> None:
        if key not in self._values:
            raise KeyError(f"Unknown setting: {key}")
        if self._values[key] == value:
            return
        self._values[key] = value
        save_settings(self.settings_path, self._values)
        self._watch_file()
        self.changed.emit(key)

    def reload(self) -> None:
        """Re-read the file and announce every key whose value differs."""
        self._watch_file()
        try:
            json.loads(self.settings_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            pass
        except (OSError, ValueError):
            # Caught mid-write; the next change event reloads again
            logger.debug("Settings file %s not readable yet", self.settings_path)
            return
        fresh = load_settings(self.settings_path)
        changed_keys = [k for k in fresh if fresh[k] != self._values.get(k)]
        self._values = fresh
        if changed_keys:
            logger.debug("Settings changed on disk: %s", ", ".join(changed_keys))
        for k in changed_keys:
            self.changed.emit(k)
