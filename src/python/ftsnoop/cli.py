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

import argparse
import logging
import os
import signal
import sys
from time import sleep

from .filters import FilterSpec
from .formatter import RecordFormatter
from .stream import KillSnoop
from .traceline import detect_offset
from .tracing import FtraceLock, Tracing, TracingError
from .utils import positive_int, positive_nonzero_int

#
# Exit status:
#
#   0   success
#   1   tracing could not be set up (permissions, lock, tracepoints)
#   2   argparse error
#

_examples = """examples:
    killsnoop              # watch kill()s live (unbuffered)
    killsnoop -d 1         # trace 1 sec (buffered)
    killsnoop -p 181       # trace kill()s issued to PID 181 only
    killsnoop -P 181       # trace kill()s issued by PID 181 only
    killsnoop -n ssh       # trace callers whose name contains "ssh"
    killsnoop -s           # show signal names
    killsnoop -t           # include timestamps
    killsnoop -x           # only show failed kill()s
"""

def _getParser():
    parser = argparse.ArgumentParser(
        prog="killsnoop",
        description="Trace kill() syscalls and their result, using ftrace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_examples)
    a = parser.add_argument
    a("-d", "--duration", type=positive_nonzero_int,
      help="duration (seconds), and use buffers")
    a("-s", "--signames", action="store_true",
      help="show signal names instead of numbers")
    a("-t", "--time", action="store_true",
      help="include time (seconds)")
    a("-x", "--failed", action="store_true",
      help="only show failed kill syscalls")
    a("-v", "--verbose", action="store_true",
      help="print debug messages")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-n", "--name",
      help="trace process names containing this")
    group.add_argument("-p", "--pid", type=positive_int,
      help="trace this target PID only")
    group.add_argument("-P", "--caller-pid", type=positive_int,
      help="trace this calling PID only")
    # alternate tracefs root and lock file, for testing
    a("--tracefs", help=argparse.SUPPRESS)
    a("--lock", help=argparse.SUPPRESS)
    return parser

def parse_args(argv=None):
    return _getParser().parse_args(argv)

_STOP_SIGNALS = (signal.SIGTERM, signal.SIGHUP, signal.SIGQUIT)

def _interrupt(signum, frame):
    raise KeyboardInterrupt

def _ignore_signals():
    # as cleanup must finish, trap Ctrl-C and friends while it runs
    for sig in (signal.SIGINT,) + _STOP_SIGNALS:
        signal.signal(sig, signal.SIG_IGN)

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING)
    logging.debug("Starting with the following args: %s", args)

    filters = FilterSpec(name=args.name, pid=args.pid,
                         caller_pid=args.caller_pid, failed=args.failed)
    tracing = Tracing(root=args.tracefs, lock=FtraceLock(args.lock))

    handlers = {signal.SIGINT: signal.getsignal(signal.SIGINT)}
    for sig in _STOP_SIGNALS:
        handlers[sig] = signal.signal(sig, _interrupt)

    engaged = False
    try:
        tracing.setup()
        engaged = True

        snoop = KillSnoop(filters=filters,
                          formatter=RecordFormatter(args.time, args.signames))
        if args.duration:
            print("Tracing kill()s for %d seconds (buffered)..." %
                  args.duration, file=sys.stderr)
            snoop.print_header()
            sleep(args.duration)
            # the batch starts with its own header
            lines = tracing.trace_lines()
            snoop.offset = detect_offset(lines)
            snoop.run(lines)
        else:
            # trace_pipe carries no header, take it from the trace file
            snoop.offset = detect_offset(tracing.header_lines())
            print("Tracing kill()s. Ctrl-C to end.", file=sys.stderr)
            snoop.print_header()
            snoop.run(tracing.pipe_lines())
    except TracingError as e:
        # setup has already undone its own partial work
        print(e, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nEnding tracing...", file=sys.stderr)
    except BrokenPipeError:
        # reader went away (e.g. piped into head); silence the final flush
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    finally:
        _ignore_signals()
        try:
            if engaged:
                tracing.cleanup()
        finally:
            for sig, handler in handlers.items():
                if handler is not None:
                    signal.signal(sig, handler)
    return 0
