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

class FilterSpec(object):
    """FilterSpec(name=None, pid=None, caller_pid=None, failed=False)

    At most one of name (caller command substring), pid (target pid) and
    caller_pid may be given. failed keeps only calls that returned an
    error and combines with any of them.

    The name filter is checked as soon as a line's command is known, via
    match_comm(). The pid filters need a completed call and are checked by
    match_call().
    """
    def __init__(self, name=None, pid=None, caller_pid=None, failed=False):
        given = [f for f in (name, pid, caller_pid) if f is not None]
        if len(given) > 1:
            raise ValueError("name, pid and caller pid filters are "
                             "mutually exclusive")
        self.name = name
        self.pid = pid
        self.caller_pid = caller_pid
        self.failed = failed

    def match_comm(self, comm):
        if self.name is None:
            return True
        return self.name in comm

    def match_call(self, call):
        if self.pid is not None and call.tpid != self.pid:
            return False
        if self.caller_pid is not None and call.pid != self.caller_pid:
            return False
        if self.failed and call.ret == 0:
            return False
        return True

    def __repr__(self):
        return "FilterSpec(name=%r, pid=%r, caller_pid=%r, failed=%r)" % (
            self.name, self.pid, self.caller_pid, self.failed)
