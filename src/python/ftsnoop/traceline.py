# Copyright 2026 The ftsnoop Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Classification of ftrace text lines produced by the syscalls:sys_enter_kill
and syscalls:sys_exit_kill tracepoints.

Two header layouts are in the wild:

    #           TASK-PID    CPU#    TIMESTAMP  FUNCTION
    #           TASK-PID   CPU#  |||||  TIMESTAMP  FUNCTION

The second one carries an extra flags column, so every field after the
CPU number sits one position further right. Records look like:

    bash-1234  [001] d...  5000.123456: sys_kill(pid: 4d2, sig: 9)
    bash-1234  [001] d...  5000.123478: sys_kill -> 0x0
"""

import logging
import re
from collections import namedtuple

logger = logging.getLogger(__name__)

ENTRY_SYMBOL = "sys_kill"
COMMENT = "#"
ARROW = "->"

_LOST_EVENTS_RE = re.compile(r"LOST.*EVENTS")

class LineKind(object):
    COMMENT = 0
    ENTRY = 1
    EXIT = 2
    OTHER = 3

# target and signal are the hex text of an entry line, retval the raw
# value of an exit line; fields that don't apply to a kind are None
TraceLine = namedtuple("TraceLine",
    ["kind", "comm", "tid", "timestamp", "target", "signal", "retval"])

_COMMENT_LINE = TraceLine(LineKind.COMMENT, None, None, None, None, None, None)
_OTHER_LINE = TraceLine(LineKind.OTHER, None, None, None, None, None, None)

def detect_offset(header_lines):
    """detect_offset(header_lines)

    Return the column offset (0 or 1) for a run, given the comment lines
    at the top of the trace file. The header line is the one whose second
    field names the TASK column; six fields means the flags column is
    present.
    """
    for line in header_lines:
        fields = line.split()
        if len(fields) < 2 or fields[0] != COMMENT:
            continue
        if "TASK" in fields[1]:
            offset = 1 if len(fields) == 6 else 0
            logger.debug("trace header has %d fields, column offset %d",
                         len(fields), offset)
            return offset
    logger.debug("no trace header found, column offset 0")
    return 0

def split_task(task):
    """split_task(task)

    Split a "<comm>-<tid>" token on its last dash. The command name may
    contain dashes itself. Returns (comm, tid) or None if the token has no
    numeric suffix.
    """
    comm, sep, tid = task.rpartition("-")
    if not sep or not tid.isdigit():
        return None
    return comm, int(tid)

def decode_hex(text):
    """decode_hex(text)

    Decode a value rendered by the kernel as hexadecimal text, with or
    without a 0x prefix. Raises ValueError on anything else.
    """
    return int(text, 16)

def decode_pid(text):
    """decode_pid(text)

    Decode a pid_t argument. The kernel prints the register, so -1 (every
    process) and -PGID (a process group) come out as 64-bit two's
    complement; fold them back to a signed 32-bit value.
    """
    value = decode_hex(text) & 0xffffffff
    if value & 0x80000000:
        value -= 1 << 32
    return value

def is_lost_events(line):
    return _LOST_EVENTS_RE.search(line) is not None

def parse_line(line, offset=0, symbol=ENTRY_SYMBOL):
    """parse_line(line, offset=0, symbol="sys_kill")

    Classify one raw trace line and return a TraceLine with named fields,
    the column offset already applied.
    """
    fields = line.split()
    if not fields:
        return _OTHER_LINE
    if fields[0] == COMMENT:
        return _COMMENT_LINE

    func = 3 + offset
    if len(fields) <= func + 1:
        return _OTHER_LINE
    task = split_task(fields[0])
    if task is None:
        return _OTHER_LINE
    comm, tid = task
    timestamp = fields[2 + offset]

    if ARROW in fields[func + 1]:
        return TraceLine(LineKind.EXIT, comm, tid, timestamp,
                         None, None, fields[-1])

    # sys_kill(pid: 4d2, sig: 9)
    if fields[func].split("(", 1)[0] == symbol and len(fields) > func + 3:
        target = fields[func + 1].rstrip(",")
        sig = fields[func + 3].rstrip(")")
        return TraceLine(LineKind.ENTRY, comm, tid, timestamp,
                         target, sig, None)

    return _OTHER_LINE
