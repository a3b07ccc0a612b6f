#===============================================================================
#  Script_Menu  |  Tray Script Launcher
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  A tray menu that lists the *.sh scripts of one configured directory and
#  runs them on click. Supports:
#    - Automatic refresh when scripts are added, removed or renamed
#    - Per-script icons (<name>.svg / <name>.png next to the script),
#      shebang-derived icons or a configured default icon
#    - Search box filtering the list as you type
#    - Optional notification with the script's output when it finishes
#    - Optional run log appended to ~/.scriptmenu.log
#
#  Settings
#  --------
#    ~/.config/scriptmenu/settings.json
#      path, strip, shebang-icon, default-icon, notify, log,
#      use-custom-top-icon, top-icon-name
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Third-Party Components
#  ----------------------
#  This project uses PySide6, which is licensed separately by its authors.
#  Ensure compliance with its license terms when distributing this software.
#===============================================================================

import locale
import sys

from PySide6.QtWidgets import QApplication

from scriptmenu.logging_utils import setup_logger
from scriptmenu.session import Session
from scriptmenu.settings import Settings
from scriptmenu.tray import TrayHost


def main() -> int:
    # Locale-aware ordering of script names
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        pass
    setup_logger(level="INFO")

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    settings = Settings()
    session = Session(settings)
    tray = TrayHost(session)
    session.notify = tray.notify

    session.start()
    tray.show()
    app.aboutToQuit.connect(session.stop)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
