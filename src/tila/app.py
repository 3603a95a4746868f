# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import typing

import trio

from .commontypes import TilaError
from .decoder import decode_file
from .device.discovery import get_device_numbers
from .device.eventsource import LineSourceFactory, xinput_test_source
from .device.listeners import turn_on_listeners
from .logfile.sink import write_log
from .logfile.store import LogStore
from .settings import Settings

logger = logging.getLogger(__name__)


def find_error(
    exc: BaseException,
    error_type: type[BaseException] | tuple[type[BaseException], ...] = TilaError,
) -> typing.Optional[BaseException]:
    "Return exc, or the first error of error_type nested in an exception group, or None."
    if isinstance(exc, error_type):
        return exc
    if isinstance(exc, BaseExceptionGroup):
        for inner in exc.exceptions:
            found = find_error(inner, error_type)
            if found is not None:
                return found
    return None


async def run_listeners(
    settings: Settings,
    source_factory: typing.Optional[LineSourceFactory] = None,
    echo: typing.Optional[typing.TextIO] = None,
) -> int:
    if source_factory is None:
        source_factory = xinput_test_source(settings)
    device_numbers = await get_device_numbers(settings.device_name, settings.list_command)
    if not device_numbers:
        logger.warning("No devices matching %r; the log will be empty", settings.device_name)
    store = LogStore(settings.data_dir)
    async with trio.open_nursery() as nursery:
        receive_channel = turn_on_listeners(nursery, device_numbers, source_factory)
        log_file = await store.create_log_file(settings.write_buffer_size)
        return await write_log(log_file, receive_channel, echo=echo)


parser = argparse.ArgumentParser(prog="tila", description="Capture keyboard events to a log, or decode a captured log.")
parser.add_argument("logfile", type=pathlib.Path, nargs="?", help="decode this log instead of capturing")
parser.add_argument("--settings", type=pathlib.Path, help="JSON settings file")


def main(argv=sys.argv):
    """
    Args:
        argv (list): List of arguments

    Returns:
        int: A return code

    With no log file, capture until every device stream ends or the user interrupts. With one, print its decoded text.
    """
    logging.basicConfig(level=logging.INFO)
    parsed = parser.parse_args(argv[1:])
    try:
        settings = Settings.load(parsed.settings) if parsed.settings is not None else Settings.default()
        if parsed.logfile is not None:
            print(decode_file(parsed.logfile))
        else:
            trio.run(run_listeners, settings, None, sys.stdout if settings.echo else None)
    except BaseException as exc:
        if find_error(exc, KeyboardInterrupt) is not None:
            logger.info("Capture interrupted")
            return 0
        error = find_error(exc, (TilaError, OSError))
        if error is None:
            raise
        logger.error("%s", error)
        return 1
    return 0
