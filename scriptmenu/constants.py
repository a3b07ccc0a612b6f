#===============================================================================
#  Script_Menu | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for file naming conventions, fallback icon names and timings.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

APP_NAME = "scriptmenu"
APP_TITLE = "Script Menu"

SETTINGS_DIR_NAME = ".config"
SETTINGS_FILE_NAME = "settings.json"

# Run log lives at <home>/.<APP_NAME>.log
LOG_FILE_SUFFIX = ".log"

SCRIPT_SUFFIX = ".sh"

# Sibling images, in priority order
ICON_SUFFIXES = (".svg", ".png")

# --- Themed icon names ---
FALLBACK_SCRIPT_ICON = "pan-end-symbolic"
DEFAULT_TOP_ICON = "utilities-terminal-symbolic"
SEARCH_ICON = "edit-find-symbolic"

EXECUTABLE_ICON = "application-x-executable"

INTERPRETER_ICONS = {
    "sh": "application-x-shellscript",
    "bash": "application-x-shellscript",
    "dash": "application-x-shellscript",
    "zsh": "application-x-shellscript",
    "ksh": "application-x-shellscript",
    "fish": "application-x-shellscript",
    "python": "text-x-python",
    "python3": "text-x-python",
    "perl": "application-x-perl",
    "ruby": "application-x-ruby",
    "node": "application-javascript",
}

# Quiet period before a burst of directory events triggers one rescan
REFRESH_DEBOUNCE_MS = 500

# Coalesces the write bursts of a settings file save
SETTINGS_RELOAD_MS = 200

# Delay before the search box grabs focus after the menu opens
SEARCH_FOCUS_DELAY_MS = 100
