#===============================================================================
#  Script_Menu | runner.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Launches scripts as child processes without blocking the event loop and
#  hands back a future that resolves with the captured output.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from concurrent.futures import Future
from datetime import datetime
from pathlib import Path
from typing import Set

from PySide6.QtCore import QObject, QProcess

from .models import LaunchError, LaunchResult

logger = logging.getLogger(__name__)


# Qt call prefixes put in front of the OS error, e.g. "execve: Permission denied"
SPAWN_ERROR_PREFIXES = ("Child process set up failed: ", "execve: ", "chdir: ")

# Children are not parented to any runner so tearing a runner down never
# kills a script; each process leaves this set when it finishes.
_running_processes: Set[QProcess] = set()


def _decode(data) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def _spawn_error_message(message: str) -> str:
    message = message or "Failed to start process"
    for prefix in SPAWN_ERROR_PREFIXES:
        if message.startswith(prefix) and len(message) > len(prefix):
            message = message[len(prefix):]
    return message


def _release(process: QProcess) -> None:
    _running_processes.discard(process)
    process.deleteLater()


class ProcessRunner(QObject):
    """Starts scripts with no arguments and collects stdout/stderr separately.

    Every launch is independent: no concurrency limit, no per-script lock and
    no way to kill a running child. A launched script keeps running (and its
    future still resolves) after the runner itself is destroyed.
    """

    @property
    def running_count(self) -> int:
        return len(_running_processes)

    def launch(self, executable_path: str) -> "Future[LaunchResult]":
        """Start ``executable_path`` and return immediately.

        The future resolves with a LaunchResult when the child exits, or with
        a LaunchError if it could not be started at all.
        """
        script = Path(executable_path).name
        future: Future = Future()
        future.set_running_or_notify_cancel()

        process = QProcess()
        process.setProgram(str(executable_path))
        process.setArguments([])
        process.setProcessChannelMode(QProcess.ProcessChannelMode.SeparateChannels)
        process.setWorkingDirectory(str(Path(executable_path).parent))

        def on_finished(exit_code: int, _exit_status) -> None:
            if future.done():
                return
            try:
                stdout = _decode(process.readAllStandardOutput())
                stderr = _decode(process.readAllStandardError())
            except RuntimeError as e:
                # QProcess already destroyed underneath us
                _running_processes.discard(process)
                future.set_exception(LaunchError(script, f"Output lost: {e}"))
                return
            result = LaunchResult(
                script=script,
                stdout=stdout,
                stderr=stderr,
                exit_status=exit_code,
                completed_at=datetime.now().astimezone(),
            )
            _release(process)
            logger.debug("%s finished with exit code %s", script, exit_code)
            future.set_result(result)

        def on_error(error) -> None:
            # Crashes still emit finished(); only a failed start ends here.
            if error != QProcess.ProcessError.FailedToStart or future.done():
                return
            message = _spawn_error_message(process.errorString())
            _release(process)
            logger.warning("Cannot start %s: %s", executable_path, message)
            future.set_exception(LaunchError(script, message))

        process.finished.connect(on_finished)
        process.errorOccurred.connect(on_error)

        _running_processes.add(process)
        logger.debug("Launching %s", executable_path)
        process.start()
        return future
