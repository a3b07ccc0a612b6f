#===============================================================================
#  Script_Menu | watcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Watches the scripts directory and reports "catalog is stale" once per burst
#  of changes (reset-on-activity debounce).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QFileSystemWatcher, QObject, QTimer

from .constants import REFRESH_DEBOUNCE_MS

logger = logging.getLogger(__name__)


class WatchHandle(QObject):
    """Owns one directory subscription and its single pending debounce timer.

    ``cancel()`` is idempotent; once it returns ``on_stale`` is never called.
    """

    def __init__(
        self,
        directory: Optional[Path],
        on_stale: Callable[[], None],
        interval_ms: int = REFRESH_DEBOUNCE_MS,
        parent=None,
    ):
        super().__init__(parent)
        self.directory = directory
        self._on_stale = on_stale
        self._cancelled = False
        self._fs_watcher: Optional[QFileSystemWatcher] = None

        self._refresh_timer = QTimer(self)
        self._refresh_timer.setSingleShot(True)
        self._refresh_timer.setInterval(interval_ms)
        self._refresh_timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return self._fs_watcher is not None and not self._cancelled

    @property
    def pending(self) -> bool:
        return self._refresh_timer.isActive()

    def subscribe(self) -> bool:
        if self._cancelled or self._fs_watcher is not None:
            return self.active
        watcher = QFileSystemWatcher(self)
        if not watcher.addPath(str(self.directory)):
            watcher.deleteLater()
            return False
        watcher.directoryChanged.connect(self._on_directory_changed)
        self._fs_watcher = watcher
        return True

    def _on_directory_changed(self, _path: str = "") -> None:
        if self._cancelled:
            return
        # start() on a running timer restarts it: one pending timer at most
        self._refresh_timer.start()

    def _fire(self) -> None:
        if self._cancelled:
            return
        logger.debug("Scripts directory changed: %s", self.directory)
        self._on_stale()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._refresh_timer.stop()
        if self._fs_watcher is not None:
            self._fs_watcher.directoryChanged.disconnect(self._on_directory_changed)
            self._fs_watcher.removePaths(self._fs_watcher.directories())
            self._fs_watcher.deleteLater()
            self._fs_watcher = None
        logger.debug("Stopped watching %s", self.directory)


def watch_directory(
    directory,
    on_stale: Callable[[], None],
    interval_ms: int = REFRESH_DEBOUNCE_MS,
    parent=None,
) -> WatchHandle:
    """Subscribe to changes in ``directory`` (non-recursive).

    A blank or missing directory, or a filesystem that cannot be watched,
    returns an inert handle: the menu then only refreshes when it is opened.
    """
    folder = Path(directory) if directory else None
    handle = WatchHandle(folder, on_stale, interval_ms=interval_ms, parent=parent)
    if folder is None or not folder.is_dir():
        return handle

    if handle.subscribe():
        logger.debug("Watching %s", folder)
    else:
        logger.warning("Cannot watch %s, automatic refresh disabled", folder)
    return handle
