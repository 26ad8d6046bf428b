from __future__ import annotations

import io
import subprocess

import pytest
from loguru import logger

from cikit.process import (
    SpawnFailed,
    TaskConsumedError,
    TaskHandle,
    async_run,
    wait_and_collect,
)


def test_async_run_with_stdin_data():
    data = "Run in the background"
    handle = async_run(["wc", "-m"], stdin_data=data)
    result = wait_and_collect(handle)
    assert int(result.output.strip()) == len(data.encode())
    assert result.success
    assert result.returncode == 0


def test_handle_unpacks_to_stream_and_waiter():
    stdout, process = async_run(["echo", "hi"])
    assert isinstance(process, subprocess.Popen)
    assert stdout.read() == "hi\n"
    stdout.close()
    assert process.wait() == 0


def test_without_stdin_data_closes_stdin():
    handle = async_run(["cat"])
    result = handle.wait_and_collect()
    assert result.output == ""
    assert result.success


def test_stream_source_is_copied():
    source = io.StringIO("line\n" * 10_000)
    result = async_run(["wc", "-l"], stdin_data=source).wait_and_collect()
    assert int(result.output) == 10_000


def test_binary_stream_source():
    source = io.BytesIO(bytes(range(256)) * 4)
    handle = async_run(["cat"], stdin_data=source, binmode=True)
    result = handle.wait_and_collect()
    assert result.output == bytes(range(256)) * 4


def test_separate_binmode_flags():
    handle = async_run(["cat"], stdin_data="text", stdout_binmode=True)
    assert handle.wait_and_collect().output == b"text"

    handle = async_run(["cat"], stdin_data=b"bytes", stdin_binmode=True)
    assert handle.wait_and_collect().output == "bytes"


def test_non_zero_exit_is_reported_not_raised():
    result = async_run(["sh", "-c", "echo out; exit 4"]).wait_and_collect()
    assert result.output == "out\n"
    assert result.returncode == 4
    assert not result.success


def test_broken_pipe_is_not_fatal():
    handle = async_run(["true"], stdin_data="x" * (4 * 1024 * 1024))
    result = handle.wait_and_collect()
    assert result.success


def test_allow_failure_is_ignored():
    records = []
    logger.enable("cikit")
    handler_id = logger.add(
        lambda message: records.append(message.record), level="WARNING"
    )
    try:
        handle = async_run(["false"], allow_failure=True)
    finally:
        logger.remove(handler_id)
        logger.disable("cikit")
    assert handle.wait_and_collect().returncode == 1
    assert any("allow_failure" in r["message"] for r in records)


def test_forwards_options(tmp_path):
    handle = async_run(["pwd"], cwd=tmp_path)
    assert handle.wait_and_collect().output.strip() == str(tmp_path.resolve())


def test_missing_executable():
    with pytest.raises(SpawnFailed):
        async_run(["cikit-definitely-not-installed"])


def test_collect_only_once():
    handle = async_run(["true"])
    assert isinstance(handle, TaskHandle)
    assert not handle.consumed
    handle.wait_and_collect()
    assert handle.consumed
    with pytest.raises(TaskConsumedError):
        handle.wait_and_collect()


def test_invalid_utf8_output_is_replaced():
    result = async_run(["printf", "\\377"]).wait_and_collect()
    assert result.output == "\ufffd"
    assert result.success


def test_line_endings_are_preserved():
    result = async_run(["printf", "a\\r\\nb\\r"]).wait_and_collect()
    assert result.output == "a\r\nb\r"

    result = async_run(["cat"], stdin_data="x\r\n").wait_and_collect()
    assert result.output == "x\r\n"


class FailingStream(io.RawIOBase):
    def read(self, size=-1):
        raise OSError("read failed")


def test_child_is_reaped_when_drain_fails():
    process = subprocess.Popen(["true"])
    handle = TaskHandle(stdout=FailingStream(), process=process)
    with pytest.raises(OSError, match="read failed"):
        handle.wait_and_collect()
    assert process.returncode == 0
    assert handle.consumed


def test_write_error_aborts_child(monkeypatch):
    started = []

    class RecordingPopen(subprocess.Popen):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            started.append(self)

    monkeypatch.setattr(subprocess, "Popen", RecordingPopen)
    records = []
    logger.enable("cikit")
    handler_id = logger.add(
        lambda message: records.append(message.record), level="ERROR"
    )
    try:
        with pytest.raises(UnicodeDecodeError):
            async_run(["cat"], stdin_data=b"\xff\xfe")
    finally:
        logger.remove(handler_id)
        logger.disable("cikit")

    assert len(started) == 1
    assert started[0].returncode is not None
    assert started[0].stdout.closed
    assert any("Failed to write stdin" in r["message"] for r in records)


def test_wrong_stdin_type_aborts_child(monkeypatch):
    started = []

    class RecordingPopen(subprocess.Popen):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            started.append(self)

    monkeypatch.setattr(subprocess, "Popen", RecordingPopen)
    with pytest.raises(AttributeError):
        async_run(["cat"], stdin_data=12345)
    assert started[0].returncode is not None
