import logging, os, sys

if 'PYTHON_TEST_LOGFILE' in os.environ:
    logfile=os.environ['PYTHON_TEST_LOGFILE']
    logging.basicConfig(level=logging.ERROR, filename=logfile, filemode='a')
else:
    logging.basicConfig(level=logging.ERROR, stream=sys.stderr)

logger = logging.getLogger()

# Header lines of the two trace layouts: without and with the flags column.
HEADER_NOFLAGS = [
    "# tracer: nop",
    "#",
    "#           TASK-PID    CPU#    TIMESTAMP  FUNCTION",
    "#              | |       |          |         |",
]
HEADER_FLAGS = [
    "# tracer: nop",
    "#",
    "# entries-in-buffer/entries-written: 0/0   #P:4",
    "#",
    "#                              _-----=> irqs-off",
    "#                             / _----=> need-resched",
    "#                            | / _---=> hardirq/softirq",
    "#                            || / _--=> preempt-depth",
    "#                            ||| /     delay",
    "#           TASK-PID   CPU#  ||||    TIMESTAMP  FUNCTION",
    "#              | |       |   ||||       |         |",
]

def _prefix(comm, tid, ts, offset, cpu):
    flags = " ...." if offset else ""
    return "%16s-%-5d [%03d]%s %s:" % (comm, tid, cpu, flags, ts)

def entry_line(comm, tid, tpid, sig, ts="5000.000100", offset=0, cpu=1):
    # the kernel prints syscall arguments as hex without a 0x prefix
    return "%s sys_kill(pid: %x, sig: %x)" % (
        _prefix(comm, tid, ts, offset, cpu), tpid & 0xffffffffffffffff, sig)

def exit_line(comm, tid, ret=0, ts="5000.000200", offset=0, cpu=1):
    return "%s sys_kill -> 0x%x" % (
        _prefix(comm, tid, ts, offset, cpu), ret & 0xffffffffffffffff)

def make_tracefs(root):
    """Lay out the parts of a tracefs the kill() tracer touches."""
    os.makedirs(root, exist_ok=True)
    for name in ("trace", "trace_pipe", "current_tracer"):
        with open(os.path.join(root, name), "w") as f:
            f.write("")
    for event in ("sys_enter_kill", "sys_exit_kill"):
        evt_dir = os.path.join(root, "events", "syscalls", event)
        os.makedirs(evt_dir)
        with open(os.path.join(evt_dir, "enable"), "w") as f:
            f.write("0")
    return root

def read_file(*parts):
    with open(os.path.join(*parts)) as f:
        return f.read()
