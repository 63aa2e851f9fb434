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

import errno
import logging
import os

from . import TRACEFS
from .traceline import COMMENT
from .utils import FILESYSTEMENCODING, warn

logger = logging.getLogger(__name__)

# shared by every ftrace based tool, only one may drive ftrace at a time
LOCKFILE = "/var/tmp/.ftrace-lock"

ACCESS_ERROR = """ERROR: accessing tracing. Root user? Kernel has FTRACE?
    debugfs mounted? (mount -t debugfs debugfs /sys/kernel/debug)"""

class TracingError(Exception):
    pass

class FtraceLock(object):
    """FtraceLock(path=LOCKFILE)

    Marker file holding the pid of the tracer that owns ftrace. A lock
    written by someone else is never removed.
    """
    def __init__(self, path=None):
        self.path = path or LOCKFILE
        self.held = False

    def owner(self):
        try:
            with open(self.path) as f:
                return f.read().strip()
        except (IOError, OSError):
            return "?"

    def acquire(self):
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_EXCL,
                         0o644)
        except OSError as e:
            if e.errno == errno.EEXIST:
                raise TracingError("ERROR: ftrace may be in use by PID %s %s"
                                   % (self.owner(), self.path))
            raise TracingError("ERROR: unable to write %s." % self.path)
        with os.fdopen(fd, "w") as f:
            f.write("%d\n" % os.getpid())
        self.held = True
        logger.debug("acquired %s", self.path)

    def release(self):
        if not self.held:
            return
        os.remove(self.path)
        self.held = False
        logger.debug("released %s", self.path)

class Tracing(object):
    """Tracing(root=None, lock=None, err=None)

    Engage and tear down the kill() syscall tracepoints under a tracefs
    root, and read what they produce.
    """
    events = (("syscalls", "sys_enter_kill"), ("syscalls", "sys_exit_kill"))

    def __init__(self, root=None, lock=None, err=None):
        self.root = root or TRACEFS
        self.lock = lock if lock is not None else FtraceLock()
        self.err = err
        self.tracefile = None

    def _path(self, *parts):
        return os.path.join(self.root, *parts)

    def _write(self, name, value):
        logger.debug("echo %r > %s", value, name)
        with open(self._path(name), "w") as f:
            f.write(value)

    def _event_enable(self, category, event):
        return os.path.join("events", category, event, "enable")

    def check_access(self):
        trace = self._path("trace")
        if not (os.path.isfile(trace) and
                os.access(trace, os.R_OK | os.W_OK)):
            raise TracingError(ACCESS_ERROR)

    def setup(self, clear=True):
        """setup(clear=True)

        Take the ftrace lock and enable the kill() tracepoints. If
        anything fails or is interrupted after the lock is taken, whatever
        was engaged is quietly torn down before the error propagates.
        """
        self.check_access()
        self.lock.acquire()
        try:
            self._write("current_tracer", "nop")
            for category, event in self.events:
                self._write(self._event_enable(category, event), "1")
            if clear:
                self._write("trace", "")
        except (IOError, OSError) as e:
            logger.debug("setup failed: %s", e)
            self.cleanup(quiet=True)
            raise TracingError("ERROR: enabling kill() tracepoints. Exiting.")
        except BaseException:
            # Ctrl-C or a signal part way through
            self.cleanup(quiet=True)
            raise

    def cleanup(self, quiet=False):
        """cleanup(quiet=False)

        Best-effort teardown: every step runs even if an earlier one
        failed. Failures are warned about unless quiet is set.
        """
        steps = []
        for category, event in self.events:
            name = self._event_enable(category, event)
            steps.append(("echo 0 > %s" % name,
                          lambda name=name: self._write(name, "0")))
        steps.append(("echo > trace", lambda: self._write("trace", "")))
        if self.lock.held:
            steps.append(("rm %s" % self.lock.path, self.lock.release))

        for desc, step in steps:
            try:
                step()
            except (IOError, OSError) as e:
                logger.debug("cleanup step %r failed: %s", desc, e)
                if not quiet:
                    warn('command failed "%s"' % desc, file=self.err)

        if self.tracefile:
            self.tracefile.close()
            self.tracefile = None

    def header_lines(self):
        """header_lines()

        Return the comment lines at the top of the trace file.
        """
        lines = []
        with open(self._path("trace"), errors="replace") as f:
            for line in f:
                if not line.startswith(COMMENT):
                    break
                lines.append(line.rstrip("\n"))
        return lines

    def trace_lines(self):
        """trace_lines()

        Return the whole, already captured trace buffer as a list of lines.
        """
        with open(self._path("trace"), errors="replace") as f:
            return f.read().splitlines()

    def trace_open(self):
        if not self.tracefile:
            self.tracefile = open(self._path("trace_pipe"), "rb")
        return self.tracefile

    def pipe_lines(self):
        """pipe_lines()

        Yield lines from trace_pipe as the kernel produces them. This
        blocks until Ctrl-C on a live tracefs.
        """
        trace = self.trace_open()
        while True:
            line = trace.readline()
            if not line:
                return
            yield line.decode(FILESYSTEMENCODING, "replace").rstrip("\n")
