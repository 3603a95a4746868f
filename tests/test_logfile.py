# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import io
import math
import pathlib

import pytest
import trio

from tila.commontypes import LogStoreError, TimestampedLine
from tila.logfile.sink import write_log
from tila.logfile.store import LogStore


def test_to_log_keeps_raw_line():
    assert TimestampedLine(timestamp=1652024669524708, raw="key press 36\n").to_log() == "1652024669524708 key press 36\n"
    assert TimestampedLine(timestamp=7, raw="  key release 36  ").to_log() == "7   key release 36  \n"


def test_next_log_path_counts_entries(tmp_path: pathlib.Path):
    for i in range(3):
        (tmp_path / f"tila-{i}.log").write_text("")
    assert LogStore(tmp_path).next_log_path() == tmp_path / "tila-3.log"


def test_ensure_dir_is_idempotent(tmp_path: pathlib.Path):
    store = LogStore(tmp_path / "share" / "tila")
    store.ensure_dir()
    store.ensure_dir()
    assert store.data_dir.is_dir()


def test_ensure_dir_over_a_file(tmp_path: pathlib.Path):
    (tmp_path / "tila").write_text("not a directory")
    with pytest.raises(LogStoreError):
        LogStore(tmp_path / "tila").ensure_dir()


async def test_create_log_file_creates_directory(tmp_path: pathlib.Path):
    data_dir = tmp_path / "tila"
    assert not data_dir.exists()
    log_file = await LogStore(data_dir).create_log_file()
    await log_file.aclose()
    assert (data_dir / "tila-0.log").is_file()


async def test_create_log_file_never_overwrites(tmp_path: pathlib.Path):
    # a gap in the numbering makes the count land on an existing name
    (tmp_path / "tila-1.log").write_text("1652024669524708 key press 24\n")
    with pytest.raises(LogStoreError):
        await LogStore(tmp_path).create_log_file()
    assert (tmp_path / "tila-1.log").read_text() == "1652024669524708 key press 24\n"


async def test_write_log(tmp_path: pathlib.Path):
    records = [
        TimestampedLine(timestamp=1652024669524708, raw="key press 30\n"),
        TimestampedLine(timestamp=1652024669524800, raw="key press 31\n"),
        TimestampedLine(timestamp=1652024669524900, raw="key release 30"),
    ]
    send_channel, receive_channel = trio.open_memory_channel(math.inf)
    with send_channel:
        for record in records:
            send_channel.send_nowait(record)
    echo = io.StringIO()
    log_file = await LogStore(tmp_path).create_log_file(buffer_size=16)
    assert await write_log(log_file, receive_channel, echo=echo) == 3
    expected = "1652024669524708 key press 30\n1652024669524800 key press 31\n1652024669524900 key release 30\n"
    assert (tmp_path / "tila-0.log").read_text() == expected
    assert echo.getvalue() == expected


async def test_write_log_waits_for_every_sender(nursery: trio.Nursery, tmp_path: pathlib.Path):
    send_channel, receive_channel = trio.open_memory_channel(math.inf)
    late_sender = send_channel.clone()
    send_channel.close()

    async def send_later():
        async with late_sender:
            await trio.sleep(0.01)
            await late_sender.send(TimestampedLine(timestamp=1, raw="key press 24\n"))

    nursery.start_soon(send_later)
    log_file = await LogStore(tmp_path).create_log_file()
    assert await write_log(log_file, receive_channel) == 1
    assert (tmp_path / "tila-0.log").read_text() == "1 key press 24\n"


class BrokenFile:
    def __init__(self):
        self.closed = False

    async def write(self, data):
        raise OSError(28, "No space left on device")

    async def flush(self):
        pass

    async def aclose(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
        return False


async def test_write_failure_is_fatal():
    send_channel, receive_channel = trio.open_memory_channel(math.inf)
    send_channel.send_nowait(TimestampedLine(timestamp=1, raw="key press 24\n"))
    broken = BrokenFile()
    with pytest.raises(OSError):
        await write_log(broken, receive_channel)
    assert broken.closed


class RecordingFile(BrokenFile):
    def __init__(self):
        super().__init__()
        self.lines = []

    async def write(self, data):
        self.lines.append(data)


class CheckingEcho:
    def __init__(self, log_file: RecordingFile):
        self.log_file = log_file
        self.lines = []

    def write(self, data):
        assert data in self.log_file.lines
        self.lines.append(data)

    def flush(self):
        pass


async def test_records_reach_the_log_before_the_echo():
    send_channel, receive_channel = trio.open_memory_channel(math.inf)
    with send_channel:
        send_channel.send_nowait(TimestampedLine(timestamp=1, raw="key press 24\n"))
        send_channel.send_nowait(TimestampedLine(timestamp=2, raw="key release 24\n"))
    log_file = RecordingFile()
    echo = CheckingEcho(log_file)
    assert await write_log(log_file, receive_channel, echo=echo) == 2
    assert echo.lines == log_file.lines == ["1 key press 24\n", "2 key release 24\n"]
    assert log_file.closed
