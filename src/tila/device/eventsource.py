# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import functools
import logging
import subprocess
import typing

import tricycle
import trio

from ..commontypes import EventSourceError, NotInContextError

if typing.TYPE_CHECKING:
    from ..settings import Settings

logger = logging.getLogger(__name__)


class LineSource(typing.Protocol):
    """An async context manager producing text lines; ``receive_line`` returns the empty string once the stream has ended."""

    async def __aenter__(self) -> LineSource: ...

    async def __aexit__(self, exc_type, exc_value, traceback) -> typing.Optional[bool]: ...

    async def receive_line(self) -> str: ...


LineSourceFactory = collections.abc.Callable[[int], LineSource]


class ProcessLineSource(tricycle.BackgroundObject, daemon=True):
    process: typing.Optional[trio.Process]
    stdout: typing.Optional[tricycle.TextReceiveStream]

    def __init__(self, command: collections.abc.Sequence[str]):
        self.command = list(command)
        self.process = None
        self.stdout = None

    async def __open__(self) -> None:
        try:
            self.process = await self.nursery.start(
                functools.partial(trio.run_process, self.command, stdout=subprocess.PIPE, check=False)
            )
        except OSError as exc:
            raise EventSourceError(f"Unable to spawn {self.command!r}: {exc}") from exc
        logger.debug("Started %r as pid %d", self.command, self.process.pid)
        # the process may still be block-buffering its stdout when it isn't a tty; that's its business, not ours
        self.stdout = tricycle.TextReceiveStream(self.process.stdout, encoding="utf-8")

    async def __close__(self) -> None:
        if self.stdout is not None:
            await self.stdout.aclose()
            self.stdout = None

    async def receive_line(self) -> str:
        if self.stdout is None:
            raise NotInContextError()
        return await self.stdout.receive_line()


def xinput_test_source(settings: Settings) -> LineSourceFactory:
    def factory(device_id: int) -> LineSource:
        return ProcessLineSource(settings.device_command(device_id))

    return factory
