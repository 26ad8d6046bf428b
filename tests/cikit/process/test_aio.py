from __future__ import annotations

from datetime import timedelta

import pytest

from cikit.process import CommandFailed, SpawnFailed, arun

pytestmark = pytest.mark.anyio


@pytest.fixture
def anyio_backend():
    return "asyncio"


async def test_arun_captures_stdout():
    output = await arun(["wc", "-m"], stdin_data="Hello")
    assert int(output) == 5


async def test_arun_binmode():
    assert await arun(["cat"], stdin_data=b"\x00\x01", binmode=True) == b"\x00\x01"


async def test_arun_failure():
    with pytest.raises(CommandFailed):
        await arun(["false"])
    assert await arun(["false"], allow_failure=True) == ""


async def test_arun_missing_executable():
    with pytest.raises(SpawnFailed):
        await arun(["cikit-definitely-not-installed"])
    assert await arun(["cikit-definitely-not-installed"], allow_failure=True) is None


async def test_arun_timeout():
    with pytest.raises(TimeoutError):
        await arun(["sleep", "2"], timeout=timedelta(milliseconds=100))


async def test_arun_invalid_utf8_is_replaced():
    assert await arun(["printf", "\\377"], allow_failure=True) == "\ufffd"
    assert await arun(["printf", "a\\r\\n"]) == "a\r\n"
