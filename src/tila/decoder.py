# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Turn a captured log back into the text that was typed.

Each log line looks like ``1652024669524708 key press 36``: timestamp, keyword, operation, keycode.
Only presses produce output; keycodes outside the table are dropped without complaint.
"""
import collections.abc
import pathlib

import msgspec

from .commontypes import LogParseError
from .keycodes import KEYCODE_TABLE, MAX_KEYCODE

PRESS = "press"
FIELD_COUNT = 4


class LogRecord(msgspec.Struct, frozen=True):
    timestamp: str
    keyword: str
    operation: str
    keycode: str

    def parsed_keycode(self, lineno: int) -> int:
        # a single leading plus sign is allowed, as in "+24"
        digits = self.keycode.removeprefix("+")
        if not (digits.isascii() and digits.isdigit()):
            raise LogParseError(f"Could not parse keycode {self.keycode!r}", lineno)
        keycode = int(digits)
        if keycode > MAX_KEYCODE:
            raise LogParseError(f"Keycode {keycode} out of range", lineno)
        return keycode


def parse_record(line: str, lineno: int) -> LogRecord:
    fields = line.split()
    if len(fields) != FIELD_COUNT:
        raise LogParseError(f"Expected {FIELD_COUNT} fields, got {len(fields)}: {line!r}", lineno)
    timestamp, keyword, operation, keycode = fields
    return LogRecord(timestamp=timestamp, keyword=keyword, operation=operation, keycode=keycode)


def decode_lines(lines: collections.abc.Iterable[str]) -> str:
    results = []
    for lineno, line in enumerate(lines, start=1):
        record = parse_record(line, lineno)
        if record.operation != PRESS:
            continue
        ch = KEYCODE_TABLE.get(record.parsed_keycode(lineno))
        if ch is not None:
            results.append(ch)
    return "".join(results)


def decode_text(contents: str) -> str:
    return decode_lines(contents.splitlines())


def decode_file(path: pathlib.Path) -> str:
    raw = path.read_bytes()
    try:
        contents = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LogParseError(f"Invalid UTF-8 at byte {exc.start}", raw.count(b"\n", 0, exc.start) + 1) from exc
    return decode_text(contents)
