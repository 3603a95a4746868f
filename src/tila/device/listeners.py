# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import math
import time

import trio

from ..commontypes import TimestampedLine
from .eventsource import LineSourceFactory

logger = logging.getLogger(__name__)

Clock = collections.abc.Callable[[], int]


def wall_clock_micros() -> int:
    return time.time_ns() // 1000


class DeviceListener:
    def __init__(
        self,
        device_id: int,
        source_factory: LineSourceFactory,
        send_channel: trio.MemorySendChannel[TimestampedLine],
        clock: Clock = wall_clock_micros,
    ):
        self.device_id = device_id
        self.source_factory = source_factory
        self.send_channel = send_channel
        self.clock = clock
        self.lines_sent = 0

    async def run(self, *, task_status=trio.TASK_STATUS_IGNORED):
        async with self.send_channel, self.source_factory(self.device_id) as source:
            logger.debug("Listening to device %d", self.device_id)
            task_status.started()
            while True:
                # sampled before the read, so this is when we started waiting, not when the event arrived
                timestamp = self.clock()
                line = await source.receive_line()
                if not line:
                    break
                try:
                    await self.send_channel.send(TimestampedLine(timestamp=timestamp, raw=line))
                except (trio.BrokenResourceError, trio.ClosedResourceError):
                    logger.warning("Log channel went away; stopping listener for device %d", self.device_id, exc_info=True)
                    return
                self.lines_sent += 1
        logger.debug("Device %d reached end of stream after %d lines", self.device_id, self.lines_sent)


def turn_on_listeners(
    nursery: trio.Nursery,
    device_numbers: collections.abc.Iterable[int],
    source_factory: LineSourceFactory,
    clock: Clock = wall_clock_micros,
) -> trio.MemoryReceiveChannel[TimestampedLine]:
    send_channel, receive_channel = trio.open_memory_channel(math.inf)
    with send_channel:
        for device_id in device_numbers:
            listener = DeviceListener(device_id, source_factory, send_channel.clone(), clock=clock)
            nursery.start_soon(listener.run)
    return receive_channel
