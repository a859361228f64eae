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

import logging
import os
import re
from os import path as osp
from os.path import join as pjoin

from seqsplit.utils import DEFAULT_LINE_WIDTH, write_records


logger = logging.getLogger(__name__)

# keep group labels from addressing other directories
UNSAFE_CHARS_RE = re.compile(r"[/\\\x00]")


class OutputCollisionError(RuntimeError):
    """Two groups of a run map to the same output file"""


def output_base(input, out_dir=None):
    """Base path for outputs: the input path, or `out_dir` plus its file name"""
    if out_dir is None:
        return input
    return pjoin(out_dir, osp.basename(input))


class OutputRouter(object):
    """Names completed groups and writes them to disk

    Output files are named `{base}.{label}{ext}`.  In dry-run mode nothing is
    created and the would-be files are only logged.  `written` collects the
    (file name, number of records) of every group routed so far.
    """

    def __init__(self, base, ext, line_width=DEFAULT_LINE_WIDTH, dry_run=False):
        self.base = base
        self.ext = ext
        self.line_width = line_width
        self.dry_run = dry_run
        self.written = []
        self._labels = {}

    def filename(self, label):
        return f"{self.base}.{UNSAFE_CHARS_RE.sub('_', str(label))}{self.ext}"

    def route(self, label, records):
        outfile = self.filename(label)
        if outfile in self._labels:
            raise OutputCollisionError(
                f"groups {self._labels[outfile]!r} and {label!r} would both be "
                f"written to {outfile}"
            )
        self._labels[outfile] = label
        if self.dry_run:
            logger.info(
                "[dry-run] would write %d sequences to file: %s", len(records), outfile
            )
        else:
            out_dir = osp.dirname(outfile)
            if out_dir:
                os.makedirs(out_dir, exist_ok=True)
            logger.info("write %d sequences to file: %s", len(records), outfile)
            write_records(records, outfile, self.line_width)
        self.written.append((outfile, len(records)))
        return outfile
