import time

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def _pump(ms: int = 10) -> None:
    QCoreApplication.processEvents(QEventLoop.ProcessEventsFlag.AllEvents, ms)
    time.sleep(ms / 1000.0)


@pytest.fixture
def wait_until(qapp):
    """Pump the Qt event loop until ``predicate()`` is true or time runs out."""

    def _wait(predicate, timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            _pump()
        return bool(predicate())

    return _wait


@pytest.fixture
def pump_for(qapp):
    """Keep the event loop running for ``seconds``."""

    def _pump_for(seconds: float) -> None:
        deadline = time.monotonic() + seconds
        while time.monotonic() < deadline:
            _pump()

    return _pump_for


@pytest.fixture
def make_script():
    def _make(folder, name: str, body: str = "", executable: bool = True, shebang: str = "#!/bin/sh"):
        path = folder / name
        text = f"{shebang}\n{body}\n" if shebang else f"{body}\n"
        path.write_text(text, encoding="utf-8")
        path.chmod(0o755 if executable else 0o644)
        return path

    return _make
