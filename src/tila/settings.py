# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import json
import os
import pathlib
import typing

import cattrs

DEFAULT_DEVICE_NAME = "keychron"
DEFAULT_LIST_COMMAND = ["xinput", "list"]
DEFAULT_TEST_COMMAND = ["xinput", "test", "{device_id}"]
DEFAULT_WRITE_BUFFER_SIZE = 4096


def default_data_dir() -> pathlib.Path:
    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        base = pathlib.Path(xdg_data_home)
    else:
        base = pathlib.Path.home() / ".local" / "share"
    return base / "tila"


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v).expanduser())


@dataclasses.dataclass(kw_only=True)
class Settings:
    device_name: str = DEFAULT_DEVICE_NAME
    data_dir: pathlib.Path = dataclasses.field(default_factory=default_data_dir)
    list_command: list[str] = dataclasses.field(default_factory=lambda: list(DEFAULT_LIST_COMMAND))
    test_command: list[str] = dataclasses.field(default_factory=lambda: list(DEFAULT_TEST_COMMAND))
    write_buffer_size: int = DEFAULT_WRITE_BUFFER_SIZE
    echo: bool = True

    def device_command(self, device_id: int) -> list[str]:
        return [arg.format(device_id=device_id) for arg in self.test_command]

    def save(self, dest: pathlib.Path):
        raw = settings_converter.unstructure(self)
        with dest.open("w") as outfile:
            json.dump(raw, outfile, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as infile:
            raw = json.load(infile)
        return settings_converter.structure(raw, cls)

    @classmethod
    def default(cls, **overrides: typing.Any):
        return cls(**overrides)
