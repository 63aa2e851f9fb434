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

from collections import namedtuple

from .traceline import decode_hex, decode_pid

PendingCall = namedtuple("PendingCall", ["target_pid", "signal"])

class PendingCallTable(object):
    """
    In-flight kill() calls keyed by thread id, bridging an entry event to
    its exit event. A thread runs one syscall at a time, so a second entry
    for the same thread replaces the first.
    """
    def __init__(self):
        self._calls = {}

    def record_entry(self, tid, target_hex, signal_hex):
        """record_entry(tid, target_hex, signal_hex)

        Decode the hex arguments of an entry event and store them under
        tid. Raises ValueError (and leaves the table untouched) if either
        value is not hex.
        """
        call = PendingCall(decode_pid(target_hex), decode_hex(signal_hex))
        self._calls[tid] = call
        return call

    def take_exit(self, tid):
        """take_exit(tid)

        Remove and return the pending call of tid, or None when the entry
        was never seen.
        """
        return self._calls.pop(tid, None)

    def __len__(self):
        return len(self._calls)

    def __contains__(self, tid):
        return tid in self._calls
