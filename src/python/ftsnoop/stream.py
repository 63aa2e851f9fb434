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

import logging
import sys
from collections import namedtuple

from .filters import FilterSpec
from .formatter import RecordFormatter
from .pending import PendingCallTable
from .traceline import ENTRY_SYMBOL, LineKind, decode_hex, is_lost_events, \
    parse_line
from .utils import printl, warn

logger = logging.getLogger(__name__)

# pid is the caller (the thread id of the trace line), tpid the target
CompletedCall = namedtuple("CompletedCall",
    ["time", "comm", "pid", "tpid", "sig", "ret"])

def normalize_return(raw):
    """normalize_return(raw)

    Map the raw hex return value of an exit event to 0 (success) or -1
    (any error). The errno itself is not reported.
    """
    try:
        value = decode_hex(raw)
    except ValueError:
        return -1
    return 0 if value == 0 else -1

class KillSnoop(object):
    """KillSnoop(offset=0, filters=None, formatter=None, out=None, err=None)

    Consume raw trace lines in order, pair each kill() entry with the exit
    of the same thread, and print one row per completed call that passes
    the filters. Rows go to out (stdout), warnings to err (stderr).
    """
    def __init__(self, offset=0, filters=None, formatter=None, out=None,
                 err=None, symbol=ENTRY_SYMBOL):
        self.offset = offset
        self.filters = filters if filters is not None else FilterSpec()
        self.formatter = formatter if formatter is not None \
            else RecordFormatter()
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.symbol = symbol
        self.pending = PendingCallTable()

    def print_header(self):
        printl(self.formatter.header(), file=self.out)

    def correlate(self, rec):
        """correlate(rec)

        Join an exit TraceLine with its pending entry. Returns a
        CompletedCall, or None for an exit whose entry was not traced.
        """
        entry = self.pending.take_exit(rec.tid)
        if entry is None:
            logger.debug("exit without entry for tid %d", rec.tid)
            return None
        return CompletedCall(rec.timestamp, rec.comm, rec.tid,
                             entry.target_pid, entry.signal,
                             normalize_return(rec.retval))

    def process_line(self, line):
        """process_line(line)

        Feed one raw line. Returns the row printed for it, if any.
        """
        if is_lost_events(line):
            warn(line.strip(), file=self.err)
            return None

        rec = parse_line(line, self.offset, self.symbol)
        if rec.kind in (LineKind.COMMENT, LineKind.OTHER):
            return None
        if not self.filters.match_comm(rec.comm):
            return None

        if rec.kind == LineKind.ENTRY:
            try:
                self.pending.record_entry(rec.tid, rec.target, rec.signal)
            except ValueError:
                logger.debug("skipping malformed entry: %s", line.strip())
            return None

        call = self.correlate(rec)
        if call is None or not self.filters.match_call(call):
            return None
        row = self.formatter.format(call)
        printl(row, file=self.out)
        return row

    def run(self, lines):
        """run(lines)

        Process every line of an iterable (a bounded batch, or the
        unbounded trace_pipe). Returns the number of rows printed.
        """
        count = 0
        for line in lines:
            if self.process_line(line) is not None:
                count += 1
        return count
