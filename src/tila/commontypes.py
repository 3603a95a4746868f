# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import msgspec


class TimestampedLine(msgspec.Struct, frozen=True):
    timestamp: int
    raw: str

    def to_log(self) -> str:
        # the raw line is kept verbatim; only the timestamp goes in front of it
        if self.raw.endswith("\n"):
            return f"{self.timestamp} {self.raw}"
        return f"{self.timestamp} {self.raw}\n"


class TilaError(Exception):
    pass


class DiscoveryError(TilaError):
    pass


class DeviceIdError(DiscoveryError, ValueError):
    pass


class EventSourceError(TilaError):
    pass


class LogStoreError(TilaError):
    pass


class LogParseError(TilaError, ValueError):
    def __init__(self, message: str, lineno: int):
        super().__init__(f"line {lineno}: {message}")
        self.lineno = lineno


class NotInContextError(Exception):
    def __init__(self):
        return super().__init__("Must be inside an appropriate context manager")
