#!/usr/bin/env python3
#
# killsnoop Trace signals issued by the kill() syscall.
#           For Linux, uses ftrace syscall tracepoints (no BPF needed).
#
# USAGE: killsnoop [-h] [-s] [-t] [-x] [-v] [-d SECS] [-n NAME | -p PID | -P PID]
#
# This reads the syscalls:sys_enter_kill and syscalls:sys_exit_kill trace
# events, pairs each entry with its exit by thread id, and prints one line
# per kill() with the caller, the target, the signal and whether it failed.
#
# Copyright 2026 The ftsnoop Authors
# Licensed under the Apache License, Version 2.0 (the "License")

import sys

from ftsnoop.cli import main

if __name__ == "__main__":
    sys.exit(main())
