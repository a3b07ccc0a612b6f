#===============================================================================
#  Script_Menu | session.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Ties settings, directory watching, scanning and launching together for one
#  enabled/disabled lifetime, and exposes plain menu data to the renderer.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, List, Optional, Set

from PySide6.QtCore import QObject, Signal

from .catalog import filter_scripts, resolve_top_icon, scan_scripts
from .models import CatalogOptions, CatalogSnapshot, IconRef, LaunchError, MenuEntry, ScriptDescriptor
from .runner import ProcessRunner
from .settings import Settings
from .sinks import NotifyFn, build_sinks, deliver, run_log_path
from .watcher import WatchHandle, watch_directory

logger = logging.getLogger(__name__)

CATALOG_KEYS = ("strip", "shebang-icon", "default-icon")
TOP_ICON_KEYS = ("use-custom-top-icon", "top-icon-name")


class Subscription:
    """A signal connection that is released explicitly with ``dispose()``."""

    def __init__(self, signal, slot: Callable):
        self._signal = signal
        self._slot = slot
        signal.connect(slot)
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        try:
            self._signal.disconnect(self._slot)
        except (RuntimeError, TypeError):
            # sender already destroyed
            pass


class Session(QObject):
    """One enabled lifetime of the script menu.

    ``start()`` acquires the watch handle and settings subscriptions;
    ``stop()`` releases them and is safe after a partial or failed start.

    Signals:
      - entriesChanged(list[MenuEntry]) after every rescan
      - topIconChanged(IconRef) when the tray icon settings change
    """

    entriesChanged = Signal(object)
    topIconChanged = Signal(object)

    def __init__(
        self,
        settings: Settings,
        notify: Optional[NotifyFn] = None,
        log_path: Optional[Path] = None,
        runner: Optional[ProcessRunner] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.settings = settings
        self.notify = notify
        self.log_path = Path(log_path) if log_path else run_log_path()
        self.runner = runner or ProcessRunner(self)

        self.snapshot: CatalogSnapshot = ()
        self.entries: List[MenuEntry] = []
        self.started = False
        self._watch: Optional[WatchHandle] = None
        self._subscriptions: List[Subscription] = []

    # ----------------------------
    # Lifecycle
    # ----------------------------
    def start(self) -> None:
        if self.started:
            return
        self.started = True
        self._subscriptions.append(Subscription(self.settings.changed, self._on_setting_changed))
        self._restart_watch()
        self.refresh()

    def stop(self) -> None:
        for sub in self._subscriptions:
            sub.dispose()
        self._subscriptions = []

        if self._watch is not None:
            self._watch.cancel()
            self._watch.deleteLater()
            self._watch = None

        self.snapshot = ()
        self.entries = []
        self.started = False

    @property
    def watch_handle(self) -> Optional[WatchHandle]:
        return self._watch

    def _restart_watch(self) -> None:
        # Old subscription goes before a new one is created
        if self._watch is not None:
            self._watch.cancel()
            self._watch.deleteLater()
            self._watch = None
        self._watch = watch_directory(self.settings.get_string("path"), self.refresh, parent=self)

    def _on_setting_changed(self, key: str) -> None:
        if key == "path":
            self._restart_watch()
            self.refresh()
        elif key in CATALOG_KEYS:
            self.refresh()
        elif key in TOP_ICON_KEYS:
            self.topIconChanged.emit(self.top_icon())

    # ----------------------------
    # Menu data
    # ----------------------------
    def refresh(self) -> CatalogSnapshot:
        """Rescan with the current settings and publish fresh entries."""
        snapshot = scan_scripts(self.settings.get_string("path"), CatalogOptions.from_settings(self.settings))
        entries = [self._entry_for(s) for s in snapshot]
        # Swap both at once so readers never see a half-built list
        self.snapshot, self.entries = snapshot, entries
        self.entriesChanged.emit(list(entries))
        return snapshot

    def _entry_for(self, script: ScriptDescriptor) -> MenuEntry:
        return MenuEntry(
            file_name=script.file_name,
            display_name=script.display_name,
            icon=script.icon,
            on_activate=lambda: self.launch(script),
        )

    def menu_opened(self) -> List[MenuEntry]:
        # Pick up settings saved elsewhere even if the file event is still pending
        self.settings.reload()
        self.refresh()
        return list(self.entries)

    def filter(self, query: str) -> Set[str]:
        return filter_scripts(self.snapshot, query)

    def top_icon(self) -> IconRef:
        return resolve_top_icon(
            self.settings.get_boolean("use-custom-top-icon"),
            self.settings.get_string("top-icon-name"),
        )

    # ----------------------------
    # Launch behavior
    # ----------------------------
    def launch(self, script: ScriptDescriptor) -> Future:
        """Run a script; sinks are chosen from the settings at launch time."""
        self.settings.reload()
        sinks = build_sinks(self.settings, self.notify, self.log_path)
        future = self.runner.launch(script.path)

        def on_done(f: Future) -> None:
            error = f.exception()
            if error is None:
                deliver(sinks, result=f.result())
            elif isinstance(error, LaunchError):
                deliver(sinks, error=error)
            else:
                logger.error("Unexpected launch failure for %s: %s", script.file_name, error)

        future.add_done_callback(on_done)
        return future
