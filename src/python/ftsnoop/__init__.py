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

import os

DEBUGFS = "/sys/kernel/debug"
TRACEFS = os.path.join(DEBUGFS, "tracing")
if not os.path.exists(TRACEFS):
    TRACEFS = "/sys/kernel/tracing"

from .version import __version__
from .traceline import TraceLine, LineKind, detect_offset, parse_line, \
    is_lost_events
from .pending import PendingCall, PendingCallTable
from .filters import FilterSpec
from .signals import SIGNAMES, signame
from .formatter import RecordFormatter
from .stream import CompletedCall, KillSnoop
from .tracing import Tracing, FtraceLock, TracingError
