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
import sys

FILESYSTEMENCODING = sys.getfilesystemencoding()

def printl(s, file=None, nl=1):
    """
    printl(s)

    print a line to stdout (or file) and flush, so that an interrupted
    reader never sees half a row
    """
    if file is None:
        file = sys.stdout
    # one write per row, so a row never goes out without its newline
    file.write(s + "\n" if nl else s)
    file.flush()

def warn(msg, file=None):
    if file is None:
        file = sys.stderr
    printl("WARNING: %s" % msg, file=file)

# arg validation
def positive_int(val):
    try:
        ival = int(val)
    except ValueError:
        raise argparse.ArgumentTypeError("must be an integer")

    if ival < 0:
        raise argparse.ArgumentTypeError("must be positive")
    return ival

def positive_nonzero_int(val):
    ival = positive_int(val)
    if ival == 0:
        raise argparse.ArgumentTypeError("must be nonzero")
    return ival
