#===============================================================================
#  Script_Menu | tray.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  System tray host: renders the session's menu entries under a search box
#  and shows run notifications as tray balloon messages.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import QTimer
from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import QLineEdit, QMenu, QSystemTrayIcon, QWidgetAction

from .constants import APP_TITLE, EXECUTABLE_ICON, SEARCH_FOCUS_DELAY_MS, SEARCH_ICON
from .models import CustomIcon, ExecutableHintIcon, IconRef, MenuEntry, NamedIcon
from .session import Session


def icon_for(ref: IconRef) -> QIcon:
    if isinstance(ref, CustomIcon):
        return QIcon(ref.path)
    if isinstance(ref, ExecutableHintIcon):
        return QIcon.fromTheme(ref.icon_name, QIcon.fromTheme(EXECUTABLE_ICON))
    if isinstance(ref, NamedIcon):
        return QIcon.fromTheme(ref.name)
    raise TypeError(f"Unknown icon reference: {ref!r}")


class TrayHost(QSystemTrayIcon):
    """Tray icon whose menu lists the scripts of one Session."""

    def __init__(self, session: Session, parent=None):
        super().__init__(parent)
        self.session = session
        self.setToolTip(APP_TITLE)
        self.setIcon(icon_for(session.top_icon()))

        self.menu = QMenu()
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search scripts...")
        self.search.setClearButtonEnabled(True)
        self.search.addAction(QIcon.fromTheme(SEARCH_ICON), QLineEdit.ActionPosition.LeadingPosition)
        search_action = QWidgetAction(self.menu)
        search_action.setDefaultWidget(self.search)
        self.menu.addAction(search_action)
        self.menu.addSeparator()

        self._actions: Dict[str, QAction] = {}

        self.search.textChanged.connect(self.apply_filter)
        self.menu.aboutToShow.connect(self.on_menu_about_to_show)
        session.entriesChanged.connect(self.rebuild_menu)
        session.topIconChanged.connect(lambda ref: self.setIcon(icon_for(ref)))

        self.setContextMenu(self.menu)

    def notify(self, title: str, message: str) -> None:
        self.showMessage(title, message, QSystemTrayIcon.MessageIcon.Information)

    # ----------------------------
    # Refresh / rebuild
    # ----------------------------
    def rebuild_menu(self, entries: List[MenuEntry]) -> None:
        for act in self._actions.values():
            self.menu.removeAction(act)
            act.deleteLater()
        self._actions = {}

        for entry in entries:
            act = QAction(icon_for(entry.icon), entry.display_name, self.menu)
            act.triggered.connect(lambda _checked=False, e=entry: self.activate(e))
            self.menu.addAction(act)
            self._actions[entry.file_name] = act

        self.apply_filter(self.search.text())

    def apply_filter(self, text: str) -> None:
        visible = self.session.filter(text)
        for file_name, act in self._actions.items():
            act.setVisible(file_name in visible)

    def on_menu_about_to_show(self) -> None:
        self.search.clear()
        self.session.menu_opened()
        QTimer.singleShot(SEARCH_FOCUS_DELAY_MS, self.search.setFocus)

    # ----------------------------
    # Launch behavior
    # ----------------------------
    def activate(self, entry: MenuEntry) -> None:
        self.menu.hide()
        entry.on_activate()
