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
import math
from collections import OrderedDict, namedtuple

from seqsplit.region import content_key


logger = logging.getLogger(__name__)

Group = namedtuple("Group", ["key", "records"])
PartitionPlan = namedtuple("PartitionPlan", ["total", "requested", "size", "parts"])


def plan_parts(total, parts):
    """Records per part for splitting `total` records into `parts` parts

    The size is the ceiling of total / parts, so no more than `parts` groups
    are produced.  Rounding up can leave fewer groups than requested (10
    records into 6 parts gives 5 parts of 2); `PartitionPlan.parts` is the
    number of groups that will actually be written.
    """
    if parts <= 0:
        raise ValueError(f"number of parts should be greater than 0: {parts}")
    if total == 0:
        return PartitionPlan(total=0, requested=parts, size=0, parts=0)
    if total % parts > 0:
        size = total // parts + 1
    else:
        size = total // parts
    achieved = math.ceil(total / size)
    if achieved != parts:
        logger.info("corrected: split into %d parts", achieved)
    return PartitionPlan(total=total, requested=parts, size=size, parts=achieved)


class Partitioner(object):
    """Assigns a stream of records to groups

    `groups()` consumes an iterable of records and generates Group tuples in
    output order.  `label()` is the group-specific part of the output name.
    """

    def groups(self, records):
        raise NotImplementedError

    def label(self, key):
        raise NotImplementedError

    def split(self, records, router):
        for group in self.groups(records):
            router.route(self.label(group.key), group.records)
        return router.written


class FixedSizePartitioner(Partitioner):
    def __init__(self, size):
        if size <= 0:
            raise ValueError(f"size of parts should be greater than 0: {size}")
        self.size = size

    def groups(self, records):
        index = 1
        buffer = []
        for record in records:
            buffer.append(record)
            if len(buffer) == self.size:
                yield Group(index, buffer)
                index += 1
                buffer = []
        if buffer:
            yield Group(index, buffer)

    def label(self, key):
        return f"part_{key:03d}"


class PartCountPartitioner(FixedSizePartitioner):
    """Split into a fixed number of parts

    Without `total`, all records are read into memory to count them.  With
    `total` (from a first counting pass over the input), records are streamed
    and at most one part is held at a time.
    """

    def __init__(self, parts, total=None):
        if parts <= 0:
            raise ValueError(f"number of parts should be greater than 0: {parts}")
        self.parts = parts
        self.size = None
        self.plan = None
        if total is not None:
            self.set_total(total)

    def set_total(self, total):
        self.plan = plan_parts(total, self.parts)
        self.size = self.plan.size
        return self.plan

    def groups(self, records):
        if self.plan is None:
            records = list(records)
            logger.info("read %d sequences", len(records))
            self.set_total(len(records))
        if self.plan.size == 0:
            return
        yield from super().groups(records)


class KeyedPartitioner(Partitioner):
    """Groups records sharing a key; groups are emitted at end of input

    Groups come out in the order their keys were first seen, with members in
    input order.
    """

    def key(self, record):
        raise NotImplementedError

    def groups(self, records):
        groups = OrderedDict()
        num_records = 0
        for record in records:
            groups.setdefault(self.key(record), []).append(record)
            num_records += 1
        logger.info("read %d sequences", num_records)
        for (key, members) in groups.items():
            yield Group(key, members)


class IdentifierPartitioner(KeyedPartitioner):
    def key(self, record):
        return record.id

    def label(self, key):
        return f"id_{key}"


class RegionPartitioner(KeyedPartitioner):
    def __init__(self, region, digest=False):
        self.region = region
        self.digest = digest

    def key(self, record):
        return content_key(record, self.region, digest=self.digest)

    def label(self, key):
        return f"region_{self.region}_{key}"


def make_partitioner(config):
    """Partitioner for a validated SplitConfig"""
    if config.mode == "size":
        logger.info("split into %d seqs per file", config.size)
        return FixedSizePartitioner(config.size)
    if config.mode == "part":
        logger.info("split into %d parts", config.parts)
        return PartCountPartitioner(config.parts)
    if config.mode == "id":
        logger.info("split by ID")
        return IdentifierPartitioner()
    if config.mode == "region":
        logger.info("split by region: %s", config.region)
        return RegionPartitioner(config.region, digest=config.md5)
    raise ValueError(f"unknown split mode: {config.mode}")
