#!/usr/bin/env python3
# Copyright 2026 The ftsnoop Authors
# Licensed under the Apache License, Version 2.0 (the "License")

import unittest

from ftsnoop.traceline import LineKind, decode_hex, decode_pid, \
    detect_offset, is_lost_events, parse_line, split_task
from utils import HEADER_FLAGS, HEADER_NOFLAGS, entry_line, exit_line

class TestDetectOffset(unittest.TestCase):
    def test_flags_header(self):
        self.assertEqual(detect_offset(HEADER_FLAGS), 1)

    def test_noflags_header(self):
        self.assertEqual(detect_offset(HEADER_NOFLAGS), 0)

    def test_no_header(self):
        self.assertEqual(detect_offset([]), 0)
        self.assertEqual(detect_offset(["# tracer: nop", "#"]), 0)

    def test_tgid_header_is_not_flags_layout(self):
        header = ["#   TASK-PID    TGID   CPU#  ||||   TIMESTAMP  FUNCTION"]
        self.assertEqual(detect_offset(header), 0)

class TestSplitTask(unittest.TestCase):
    def test_simple(self):
        self.assertEqual(split_task("bash-1234"), ("bash", 1234))

    def test_dashes_in_comm(self):
        self.assertEqual(split_task("systemd-journal-402"),
                         ("systemd-journal", 402))
        self.assertEqual(split_task("kworker/u8:2-ev-9"), ("kworker/u8:2-ev", 9))

    def test_no_tid(self):
        self.assertIsNone(split_task("bash"))
        self.assertIsNone(split_task("bash-abc"))

class TestParseLine(unittest.TestCase):
    def test_comment(self):
        rec = parse_line(HEADER_FLAGS[-2], 1)
        self.assertEqual(rec.kind, LineKind.COMMENT)

    def test_blank(self):
        self.assertEqual(parse_line("", 0).kind, LineKind.OTHER)
        self.assertEqual(parse_line("   ", 1).kind, LineKind.OTHER)

    def test_entry(self):
        for offset in (0, 1):
            rec = parse_line(entry_line("bash", 1234, 4321, 9,
                                        offset=offset), offset)
            self.assertEqual(rec.kind, LineKind.ENTRY)
            self.assertEqual(rec.comm, "bash")
            self.assertEqual(rec.tid, 1234)
            self.assertEqual(rec.timestamp, "5000.000100:")
            self.assertEqual(decode_hex(rec.target), 4321)
            self.assertEqual(decode_hex(rec.signal), 9)
            self.assertIsNone(rec.retval)

    def test_exit(self):
        for offset in (0, 1):
            rec = parse_line(exit_line("bash", 1234, -3, offset=offset),
                             offset)
            self.assertEqual(rec.kind, LineKind.EXIT)
            self.assertEqual(rec.tid, 1234)
            self.assertEqual(rec.retval, "0xfffffffffffffffd")
            self.assertIsNone(rec.target)

    def test_exit_is_recognized_by_arrow(self):
        line = "bash-1234 [001] .... 5000.000200: __x64_sys_kill -> 0x0"
        rec = parse_line(line, 1)
        self.assertEqual(rec.kind, LineKind.EXIT)
        self.assertEqual(rec.retval, "0x0")

    def test_wrong_offset_is_not_an_entry(self):
        rec = parse_line(entry_line("bash", 1, 2, 9, offset=1), 0)
        self.assertEqual(rec.kind, LineKind.OTHER)

    def test_other_syscall(self):
        line = "bash-1234 [001] 5000.000100: sys_tkill(pid: 4d2, sig: 9)"
        self.assertEqual(parse_line(line, 0).kind, LineKind.OTHER)

    def test_lost_events_line_is_other(self):
        self.assertEqual(parse_line("CPU:2 [LOST 17 EVENTS]", 0).kind,
                         LineKind.OTHER)

class TestLostEvents(unittest.TestCase):
    def test_lost_events(self):
        self.assertTrue(is_lost_events("CPU:2 [LOST 17 EVENTS]"))
        self.assertTrue(is_lost_events("# LOST 3 EVENTS"))
        self.assertFalse(is_lost_events(HEADER_FLAGS[0]))
        self.assertFalse(is_lost_events(entry_line("LOST", 1, 2, 9)))

class TestDecodeHex(unittest.TestCase):
    def test_decode(self):
        self.assertEqual(decode_hex("4d2"), 1234)
        self.assertEqual(decode_hex("0x0"), 0)
        self.assertRaises(ValueError, decode_hex, "zz")

    def test_decode_pid(self):
        self.assertEqual(decode_pid("4d2"), 1234)
        self.assertEqual(decode_pid("0"), 0)
        self.assertEqual(decode_pid("ffffffffffffffff"), -1)
        self.assertEqual(decode_pid("ffffffff"), -1)
        self.assertEqual(decode_pid("fffffffffffffc18"), -1000)
        self.assertEqual(decode_pid("7fffffff"), 2147483647)
        self.assertRaises(ValueError, decode_pid, "zz")

if __name__ == "__main__":
    unittest.main()
