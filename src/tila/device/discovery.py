# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import logging
import subprocess

import trio

from ..commontypes import DeviceIdError, DiscoveryError
from ..keycodes import MAX_KEYCODE

logger = logging.getLogger(__name__)

ID_MARKER = "id="
# xinput ids fit in a byte, same as keycodes
MAX_DEVICE_ID = MAX_KEYCODE


def matching_lines(listing: str, device_name: str) -> list[str]:
    device_name = device_name.lower()
    return [line for line in listing.lower().splitlines() if device_name in line]


def parse_device_id(line: str) -> int:
    id_position = line.rfind(ID_MARKER) + len(ID_MARKER)
    digits = []
    for ch in line[id_position:]:
        if not (ch.isascii() and ch.isdigit()):
            break
        digits.append(ch)
    if not digits:
        raise DeviceIdError(f"Failed to parse id from {line!r}")
    device_id = int("".join(digits))
    if device_id > MAX_DEVICE_ID:
        raise DeviceIdError(f"Device id {device_id} out of range in {line!r}")
    return device_id


def parse_device_numbers(lines: collections.abc.Iterable[str]) -> list[int]:
    return [parse_device_id(line) for line in lines if ID_MARKER in line]


async def get_device_numbers(device_name: str, list_command: collections.abc.Sequence[str]) -> list[int]:
    try:
        listing = await trio.run_process(list(list_command), capture_stdout=True)
    except OSError as exc:
        raise DiscoveryError(f"Unable to run {list_command!r}: {exc}") from exc
    except subprocess.CalledProcessError as exc:
        raise DiscoveryError(f"{list_command!r} exited with status {exc.returncode}") from exc
    device_numbers = parse_device_numbers(matching_lines(listing.stdout.decode(), device_name))
    logger.info("Found devices %r matching %r", device_numbers, device_name)
    return device_numbers
