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

import gzip
import re
import sys
from collections import namedtuple
from os import path as osp

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator


DEFAULT_ID_REGEXP = r"^(\S+)\s?"
DEFAULT_LINE_WIDTH = 60

FASTX_EXT_RE = re.compile(r"(.+?)(\.(?:fasta|fastq|fas|fna|faa|fa|fq)(?:\.gz)?)$", re.I)
FASTQ_EXT_RE = re.compile(r"\.f(?:ast)?q(?:\.gz)?$", re.I)

Record = namedtuple("Record", ["id", "description", "seq", "qual"])


class ConfigurationError(ValueError):
    """Invalid combination or value of split settings"""


# handle gzipped or uncompressed files
def open_maybe_compressed(*args, **kwargs):
    if args[0].endswith(".gz"):
        # gzip modes are different from default open modes
        if len(args[1]) == 1:
            args = (args[0], args[1] + "t") + args[2:]
        compresslevel = kwargs.pop("compresslevel", 6)
        return gzip.open(*args, **kwargs, compresslevel=compresslevel)
    else:
        return open(*args, **kwargs)


def is_stdin(path):
    return path == "-"


def split_fastx_name(path):
    """Split a sequence file path into (base, ext)

    The extension keeps a trailing `.gz`, so `reads/a.fq.gz` gives
    `("reads/a", ".fq.gz")`.  Paths without a known sequence extension are
    split at their last suffix.
    """
    m = FASTX_EXT_RE.match(path)
    if m is not None:
        return m.group(1), m.group(2)
    return osp.splitext(path)


def guess_format(path):
    if FASTQ_EXT_RE.search(path):
        return "fastq"
    return "fasta"


def compile_id_regexp(pattern):
    regexp = re.compile(pattern)
    if regexp.groups < 1:
        raise ValueError(f"id regexp must contain a capture group: {pattern}")
    return regexp


def parse_id(description, id_regexp):
    """Record id from a header line

    The first capture group of `id_regexp` is the id.  When the pattern does
    not match, the whole header is used.
    """
    m = id_regexp.search(description)
    if m is None or m.group(1) is None:
        return description
    return m.group(1)


def iter_records(handle, fmt="fasta", id_regexp=DEFAULT_ID_REGEXP):
    """Generate Record tuples from an open fasta/fastq handle

    Malformed input raises ValueError (from the Biopython parsers).
    """
    if isinstance(id_regexp, str):
        id_regexp = compile_id_regexp(id_regexp)
    if fmt == "fasta":
        for (title, seq) in SimpleFastaParser(handle):
            yield Record(parse_id(title, id_regexp), title, seq, None)
    elif fmt == "fastq":
        for (title, seq, qual) in FastqGeneralIterator(handle):
            yield Record(parse_id(title, id_regexp), title, seq, qual)
    else:
        raise ValueError(f"unknown sequence format: {fmt}")


def read_records(path, fmt="fasta", id_regexp=DEFAULT_ID_REGEXP):
    """Generate records from a path; `-` is stdin"""
    if is_stdin(path):
        yield from iter_records(sys.stdin, fmt, id_regexp)
        return
    with open_maybe_compressed(path, "r") as ip:
        yield from iter_records(ip, fmt, id_regexp)


def count_records(path, fmt="fasta"):
    """Count the records of a file without keeping them in memory"""
    num_records = 0
    with open_maybe_compressed(path, "r") as ip:
        if fmt == "fastq":
            parser = FastqGeneralIterator(ip)
        else:
            parser = SimpleFastaParser(ip)
        for _ in parser:
            num_records += 1
    return num_records


def wrap(seq, width):
    if width <= 0 or len(seq) <= width:
        return seq
    return "\n".join(seq[i : i + width] for i in range(0, len(seq), width))


def format_record(record, line_width=DEFAULT_LINE_WIDTH):
    # fastq records are written unwrapped
    if record.qual is not None:
        return f"@{record.description}\n{record.seq}\n+\n{record.qual}"
    return f">{record.description}\n{wrap(record.seq, line_width)}"


def write_records(records, path, line_width=DEFAULT_LINE_WIDTH):
    with open_maybe_compressed(path, "w") as op:
        for record in records:
            print(format_record(record, line_width), file=op)
