import time

import pytest
import shiboken6

from scriptmenu.models import LaunchError
from scriptmenu.runner import ProcessRunner, _spawn_error_message


@pytest.fixture
def runner(qapp):
    return ProcessRunner()


def test_successful_run_captures_output(tmp_path, runner, make_script, wait_until):
    script = make_script(tmp_path, "ok.sh", "printf done")

    future = runner.launch(str(script))
    assert wait_until(future.done)

    result = future.result()
    assert result.script == "ok.sh"
    assert result.stdout == "done"
    assert result.stderr == ""
    assert result.exit_status == 0
    assert result.completed_at.tzinfo is not None
    assert runner.running_count == 0


def test_stderr_and_exit_status_are_kept_apart(tmp_path, runner, make_script, wait_until):
    script = make_script(tmp_path, "fail.sh", "echo out\necho err >&2\nexit 3")

    future = runner.launch(str(script))
    assert wait_until(future.done)

    result = future.result()
    assert result.stdout == "out\n"
    assert result.stderr == "err\n"
    assert result.exit_status == 3


def test_large_output_is_fully_drained(tmp_path, runner, make_script, wait_until):
    script = make_script(tmp_path, "big.sh", "head -c 300000 /dev/zero | tr '\\0' x")

    future = runner.launch(str(script))
    assert wait_until(future.done, timeout=10.0)

    assert future.result().stdout == "x" * 300000


def test_launch_does_not_wait_for_the_child(tmp_path, runner, make_script, wait_until):
    script = make_script(tmp_path, "slow.sh", "sleep 1\nprintf late")

    start = time.monotonic()
    future = runner.launch(str(script))

    assert time.monotonic() - start < 0.5
    assert not future.done()
    assert wait_until(future.done, timeout=5.0)
    assert future.result().stdout == "late"


def test_missing_executable_resolves_to_error(tmp_path, runner, wait_until):
    future = runner.launch(str(tmp_path / "ghost.sh"))
    assert wait_until(future.done)

    error = future.exception()
    assert isinstance(error, LaunchError)
    assert error.script == "ghost.sh"
    assert error.message
    assert runner.running_count == 0


def test_not_executable_resolves_to_error(tmp_path, runner, make_script, wait_until):
    script = make_script(tmp_path, "plain.sh", "echo hi", executable=False)

    future = runner.launch(str(script))
    assert wait_until(future.done)

    assert isinstance(future.exception(), LaunchError)


def test_repeated_launches_are_independent(tmp_path, runner, make_script, wait_until):
    script = make_script(tmp_path, "twice.sh", "sleep 0.2\necho $$")

    before = runner.running_count
    first = runner.launch(str(script))
    second = runner.launch(str(script))
    assert runner.running_count == before + 2
    assert wait_until(lambda: first.done() and second.done())

    assert first.result().exit_status == 0
    assert second.result().exit_status == 0
    assert first.result().stdout != second.result().stdout


def test_runs_in_the_scripts_directory(tmp_path, runner, make_script, wait_until):
    script = make_script(tmp_path, "where.sh", "pwd")

    future = runner.launch(str(script))
    assert wait_until(future.done)

    assert future.result().stdout.strip() == str(tmp_path.resolve())


def test_script_outlives_its_runner(tmp_path, qapp, make_script, wait_until, pump_for):
    marker = tmp_path / "marker"
    script = make_script(tmp_path, "slow.sh", f"sleep 1\ntouch '{marker}'\nprintf finished")
    runner = ProcessRunner()

    future = runner.launch(str(script))
    pump_for(0.2)
    shiboken6.delete(runner)

    assert wait_until(future.done, timeout=5.0)
    assert marker.exists()
    assert future.result().stdout == "finished"
    assert future.result().exit_status == 0


def test_spawn_error_message_strips_only_known_prefixes():
    assert _spawn_error_message("execve: No such file or directory") == "No such file or directory"
    assert _spawn_error_message("Child process set up failed: execve: Permission denied") == "Permission denied"
    odd = "Process failed to start: /srv/a: b/run.sh"
    assert _spawn_error_message(odd) == odd
    assert _spawn_error_message("") == "Failed to start process"
