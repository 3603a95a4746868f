# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import pathlib

import trio

from ..commontypes import LogStoreError
from ..settings import DEFAULT_WRITE_BUFFER_SIZE

logger = logging.getLogger(__name__)

LOG_FILE_TEMPLATE = "tila-{count}.log"


class LogStore:
    def __init__(self, data_dir: pathlib.Path):
        self.data_dir = data_dir

    def ensure_dir(self):
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LogStoreError(f"Could not create directory at {self.data_dir}: {exc}") from exc

    def next_log_path(self) -> pathlib.Path:
        try:
            file_count = sum(1 for _ in self.data_dir.iterdir())
        except OSError as exc:
            raise LogStoreError(f"Could not read data directory {self.data_dir}: {exc}") from exc
        return self.data_dir / LOG_FILE_TEMPLATE.format(count=file_count)

    async def create_log_file(self, buffer_size: int = DEFAULT_WRITE_BUFFER_SIZE):
        self.ensure_dir()
        path = self.next_log_path()
        try:
            # never overwrite an earlier capture
            log_file = await trio.open_file(path, "x", buffering=buffer_size, encoding="utf-8")
        except OSError as exc:
            raise LogStoreError(f"Could not create log file {path}: {exc}") from exc
        logger.info("Logging to %s", path)
        return log_file
