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

from .signals import signame

class RecordFormatter(object):
    """RecordFormatter(timestamps=False, signames=False)

    Render the header and one fixed-width row per completed kill() call.
    """
    def __init__(self, timestamps=False, signames=False):
        self.timestamps = timestamps
        self.signames = signames

    def _format(self, time, comm, pid, tpid, sig, ret):
        row = ""
        if self.timestamps:
            row = "%-16s " % time
        return row + "%-16.16s %-6s %-8s %-10s %-4s" % (
            comm, pid, tpid, sig, ret)

    def header(self):
        return self._format("TIME", "COMM", "PID", "TPID", "SIGNAL", "RETURN")

    def format(self, call):
        time = call.time.rstrip(":") if call.time else ""
        return self._format(time, call.comm, call.pid, call.tpid,
                            signame(call.sig, self.signames), call.ret)
