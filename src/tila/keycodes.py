# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""X11 keycodes (as printed by ``xinput test``) for the letter keys and space bar of a US layout."""
import types

KEYCODE_TABLE: types.MappingProxyType[int, str] = types.MappingProxyType(
    {
        24: "q",
        25: "w",
        26: "e",
        27: "r",
        28: "t",
        29: "y",
        30: "u",
        31: "i",
        32: "o",
        33: "p",
        38: "a",
        39: "s",
        40: "d",
        41: "f",
        42: "g",
        43: "h",
        44: "j",
        45: "k",
        46: "l",
        52: "z",
        53: "x",
        54: "c",
        55: "v",
        56: "b",
        57: "n",
        58: "m",
        65: " ",
    }
)

MAX_KEYCODE = 255
