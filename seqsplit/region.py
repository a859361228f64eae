# Copyright 2016 Uri Laserson
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Sequence regions

Regions are 1-based and inclusive on both ends.  Negative positions count
from the end of the sequence, -1 being the last residue:

    seq   :   A C G T N a c g t n
    index :   0 1 2 3 4 5 6 7 8 9

       1:1    A
       2:4        G T N
      -4:-2               c g t
      -4:-1               c g t n
      -1:-1                     n
       2:-2     C G T N a c g t
       1:-1   A C G T N a c g t n
"""

import hashlib
import re
from collections import namedtuple

from seqsplit.utils import ConfigurationError


REGION_RE = re.compile(r"^(-?\d+):(-?\d+)$")


class Region(namedtuple("Region", ["start", "end"])):
    __slots__ = ()

    def __str__(self):
        return f"{self.start}:{self.end}"


def validate_region(start, end):
    if start == 0 or end == 0:
        raise ConfigurationError("both start and end of a region should not be 0")
    if start < 0 and end > 0:
        raise ConfigurationError("when start < 0, end of a region should not be > 0")
    return Region(start, end)


def parse_region(text):
    """Parse `start:end` into a validated Region"""
    m = REGION_RE.match(text.strip())
    if m is None:
        raise ConfigurationError(
            f"invalid region: {text}. e.g. 1:12 for the first 12 bases, "
            "-12:-1 for the last 12 bases"
        )
    return validate_region(int(m.group(1)), int(m.group(2)))


def resolve_region(region, length):
    """Zero-based half-open (s, e) for `region` on a sequence of `length`

    Positions outside the sequence are clamped, and an inverted range
    collapses to the empty range (s, s).
    """
    (start, end) = region
    s = start - 1 if start > 0 else length + start
    # an inclusive 1-based end is already the exclusive 0-based end
    e = end if end > 0 else length + end + 1
    s = min(max(s, 0), length)
    e = min(max(e, 0), length)
    if e < s:
        e = s
    return (s, e)


def subseq(seq, region):
    (s, e) = resolve_region(region, len(seq))
    return seq[s:e]


def md5_hex(seq):
    return hashlib.md5(seq.encode("utf-8")).hexdigest()


def content_key(record, region, digest=False):
    """Grouping key from the subsequence of `record` at `region`

    With `digest`, the subsequence is replaced by its 32-character MD5 hex
    digest, which keeps file names short at the cost of the literal
    subsequence.
    """
    key = subseq(record.seq, region)
    if digest:
        return md5_hex(key)
    return key
