#===============================================================================
#  Script_Menu | sinks.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Consumers of finished script runs: desktop notification and the append-only
#  run log in the user's home directory.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .constants import APP_NAME, APP_TITLE, LOG_FILE_SUFFIX
from .models import LaunchError, LaunchResult

logger = logging.getLogger(__name__)

NotifyFn = Callable[[str, str], None]   # (title, message)


def run_log_path(home: Optional[Path] = None) -> Path:
    base = Path(home) if home else Path.home()
    return base / f".{APP_NAME}{LOG_FILE_SUFFIX}"


def format_notification(result: LaunchResult) -> str:
    body = result.stdout or result.stderr
    if body:
        return f"[{result.script}]: {body}"
    return f"[{result.script}]: completed with exit code: {result.exit_status}"


def format_log_record(result: LaunchResult) -> str:
    stamp = result.completed_at.isoformat(timespec="seconds")
    return (
        f"\n[{result.script}]: {stamp}\n"
        f"STDOUT:\n{result.stdout}"
        f"STDERR:\n{result.stderr}"
    )


class ResultSink:
    """Base sink. Subclasses override what they care about."""

    def on_result(self, result: LaunchResult) -> None:
        pass

    def on_error(self, error: LaunchError) -> None:
        pass


class Notifier(ResultSink):
    def __init__(self, notify: NotifyFn, title: str = APP_TITLE):
        self._notify = notify
        self.title = title

    def on_result(self, result: LaunchResult) -> None:
        self._notify(self.title, format_notification(result))

    def on_error(self, error: LaunchError) -> None:
        self._notify(self.title, f"[{error.script}]: {error.message}")


class FileLogger(ResultSink):
    """Appends one record per finished run; no rotation, no size cap."""

    def __init__(self, log_path: Path):
        self.log_path = Path(log_path)

    def on_result(self, result: LaunchResult) -> None:
        # Fresh open-append-close per record, no handle kept between runs
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(format_log_record(result))


def build_sinks(settings, notify: Optional[NotifyFn], log_path: Path) -> List[ResultSink]:
    """Compose the sinks enabled right now by the notify/log settings."""
    sinks: List[ResultSink] = []
    if notify is not None and settings.get_boolean("notify"):
        sinks.append(Notifier(notify))
    if settings.get_boolean("log"):
        sinks.append(FileLogger(log_path))
    return sinks


def deliver(sinks: Iterable[ResultSink], result: Optional[LaunchResult] = None,
            error: Optional[LaunchError] = None) -> None:
    """Hand a result (or a spawn error) to every sink.

    A failing sink is logged and skipped; it never reaches the caller or the
    other sinks.
    """
    for sink in sinks:
        try:
            if error is not None:
                sink.on_error(error)
            elif result is not None:
                sink.on_result(result)
        except Exception:
            logger.exception("Result sink %s failed", type(sink).__name__)
