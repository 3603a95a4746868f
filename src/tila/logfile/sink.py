# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

import trio

from ..commontypes import TimestampedLine

logger = logging.getLogger(__name__)


async def write_log(
    log_file,
    receive_channel: trio.MemoryReceiveChannel[TimestampedLine],
    echo: typing.Optional[typing.TextIO] = None,
) -> int:
    """Drain receive_channel into log_file (a trio async file), mirroring each record to echo if given.

    Returns once every sender has closed, after flushing and closing log_file. Records are written in the order
    they are received. Write errors propagate.
    """
    written = 0
    async with log_file, receive_channel:
        async for record in receive_channel:
            line = record.to_log()
            await log_file.write(line)
            # anything echoed has already been handed to the log file
            if echo is not None:
                echo.write(line)
                echo.flush()
            written += 1
        await log_file.flush()
    logger.debug("Wrote %d records", written)
    return written
