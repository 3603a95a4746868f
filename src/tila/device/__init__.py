# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Capture stages
# stage 0: ask the device listing tool which input devices match the configured name
# stage 1: one listener per device; each runs an event source process and timestamps its lines
# stage 2: all listeners feed one memory channel, drained in arrival order by the log sink
