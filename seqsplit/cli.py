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
import zlib

from click import (
    Choice,
    ClickException,
    Path,
    UsageError,
    argument,
    group,
    option,
)
from tqdm import tqdm

from seqsplit.config import ConfigurationError, select_mode
from seqsplit.output import OutputCollisionError, OutputRouter, output_base
from seqsplit.partition import make_partitioner
from seqsplit.utils import (
    DEFAULT_ID_REGEXP,
    DEFAULT_LINE_WIDTH,
    compile_id_regexp,
    count_records,
    guess_format,
    is_stdin,
    read_records,
    split_fastx_name,
)


logger = logging.getLogger("seqsplit")


def configure_logging(quiet=False):
    """Log to stderr; the handler is rebuilt on every invocation"""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.WARNING if quiet else logging.INFO)


@group(context_settings={"help_option_names": ["-h", "--help"]})
def cli():
    """seqsplit -- split sequence files into parts"""
    pass


@cli.command(name="split")
@argument(
    "input", default="-", type=Path(exists=True, dir_okay=False, allow_dash=True)
)
@option("-s", "--by-size", type=int, help="split into parts with N sequences each")
@option("-p", "--by-part", type=int, help="split into N parts")
@option("-i", "--by-id", is_flag=True, help="split according to sequence ID")
@option(
    "-r",
    "--by-region",
    help="split according to the subsequence of the given region, e.g. 1:12 for "
    "the first 12 bases, -12:-1 for the last 12 bases",
)
@option(
    "-m",
    "--md5",
    is_flag=True,
    help="use MD5 of the region subsequence in output file names (with -r)",
)
@option(
    "-2",
    "--two-pass",
    is_flag=True,
    help="two-pass mode for -p: count first, then split with low memory usage",
)
@option(
    "-d",
    "--dry-run",
    is_flag=True,
    help="just print messages, no files will be created",
)
@option(
    "-O",
    "--out-dir",
    type=Path(file_okay=False),
    help="output directory [default: directory of input]",
)
@option(
    "-w",
    "--line-width",
    type=int,
    default=DEFAULT_LINE_WIDTH,
    show_default=True,
    help="line width of fasta sequences, 0 for no wrap",
)
@option(
    "--id-regexp",
    default=DEFAULT_ID_REGEXP,
    show_default=True,
    help="regular expression for parsing ID (first capture group)",
)
@option(
    "-f",
    "--format",
    "fmt",
    type=Choice(["auto", "fasta", "fastq"]),
    default="auto",
    show_default=True,
    help="input format; auto guesses from the file extension",
)
@option("-q", "--quiet", is_flag=True, help="only print warnings and errors")
def split(
    input,
    by_size,
    by_part,
    by_id,
    by_region,
    md5,
    two_pass,
    dry_run,
    out_dir,
    line_width,
    id_regexp,
    fmt,
    quiet,
):
    """Split sequences into files by size, parts, ID or region.

    Exactly one of -s, -p, -i and -r must be given.  Output files are named
    after the input:

    \b
      -s/-p   <input>.part_001.fasta, <input>.part_002.fasta, ...
      -i      <input>.id_<ID>.fasta
      -r      <input>.region_<start>:<end>_<subsequence or MD5>.fasta

    Regions are 1-based, inclusive, and negative positions count from the end
    of the sequence (-1 is the last base): 1:1 is the first base, 2:-2 drops
    the first and last bases.
    """
    configure_logging(quiet)
    try:
        config = select_mode(
            input=input,
            by_size=by_size,
            by_part=by_part,
            by_id=by_id,
            by_region=by_region,
            md5=md5,
            two_pass=two_pass,
            line_width=line_width,
            id_regexp=id_regexp,
        )
    except ConfigurationError as e:
        raise UsageError(str(e))

    if fmt == "auto":
        fmt = "fasta" if is_stdin(input) else guess_format(input)
    if is_stdin(input):
        (base, ext) = ("stdin", "." + fmt)
    else:
        (base, ext) = split_fastx_name(input)
    router = OutputRouter(
        output_base(base, out_dir), ext, line_width=line_width, dry_run=dry_run
    )

    try:
        partitioner = make_partitioner(config)
        if config.two_pass:
            logger.info("first pass: get seq number")
            total = count_records(input, fmt)
            logger.info("seq number: %d", total)
            partitioner.set_total(total)
            logger.info("second pass: read and split")
        records = tqdm(
            read_records(input, fmt, compile_id_regexp(id_regexp)),
            desc="Reading sequences",
            unit=" seqs",
            disable=quiet,
        )
        written = partitioner.split(records, router)
    except (ValueError, OSError, EOFError, zlib.error, OutputCollisionError) as e:
        raise ClickException(f"{type(e).__name__}: {e}")

    logger.info("%s %d files", "would write" if dry_run else "wrote", len(written))
