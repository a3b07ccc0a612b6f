import time

from PySide6.QtCore import QTimer

from scriptmenu.watcher import watch_directory


def test_missing_directory_gives_inert_handle(tmp_path, qapp):
    calls = []
    handle = watch_directory(str(tmp_path / "missing"), lambda: calls.append(1))

    assert not handle.active
    handle.cancel()
    handle.cancel()
    assert calls == []


def test_blank_directory_gives_inert_handle(qapp):
    handle = watch_directory("", lambda: None)

    assert not handle.active
    handle.cancel()


def test_burst_of_changes_fires_once_after_quiet_period(tmp_path, qapp, pump_for):
    fired_at = []
    handle = watch_directory(str(tmp_path), lambda: fired_at.append(time.monotonic()), interval_ms=500)
    assert handle.active

    start = time.monotonic()
    for delay in (0, 100, 200):
        QTimer.singleShot(delay, handle._on_directory_changed)
    pump_for(1.3)

    assert len(fired_at) == 1
    elapsed = fired_at[0] - start
    assert 0.6 <= elapsed < 1.2
    handle.cancel()


def test_real_file_changes_are_coalesced(tmp_path, qapp, wait_until, pump_for):
    calls = []
    handle = watch_directory(str(tmp_path), lambda: calls.append(1), interval_ms=300)

    for i in range(5):
        (tmp_path / f"s{i}.sh").write_text("#!/bin/sh\n")
    (tmp_path / "s0.sh").rename(tmp_path / "renamed.sh")

    assert wait_until(lambda: calls, timeout=3.0)
    pump_for(0.5)
    assert calls == [1]
    handle.cancel()


def test_cancel_prevents_pending_refresh(tmp_path, qapp, pump_for):
    calls = []
    handle = watch_directory(str(tmp_path), lambda: calls.append(1), interval_ms=100)

    handle._on_directory_changed()
    assert handle.pending
    handle.cancel()
    assert not handle.pending
    pump_for(0.3)

    assert calls == []


def test_no_events_after_cancel(tmp_path, qapp, pump_for):
    calls = []
    handle = watch_directory(str(tmp_path), lambda: calls.append(1), interval_ms=100)
    handle.cancel()

    (tmp_path / "late.sh").write_text("#!/bin/sh\n")
    handle._on_directory_changed()
    pump_for(0.4)

    assert calls == []
    assert not handle.active
