import logging

import pytest

from seqsplit.config import select_mode
from seqsplit.output import OutputRouter
from seqsplit.partition import (
    FixedSizePartitioner,
    IdentifierPartitioner,
    PartCountPartitioner,
    RegionPartitioner,
    make_partitioner,
    plan_parts,
)
from seqsplit.region import Region, md5_hex
from seqsplit.utils import Record


def make_records(n):
    return [Record(f"r{i}", f"r{i}", "ACGT", None) for i in range(1, n + 1)]


def group_sizes(groups):
    return [len(g.records) for g in groups]


def test_fixed_size():
    groups = list(FixedSizePartitioner(3).groups(make_records(7)))
    assert group_sizes(groups) == [3, 3, 1]
    assert [g.key for g in groups] == [1, 2, 3]
    # arrival order is kept
    assert [r.id for r in groups[1].records] == ["r4", "r5", "r6"]


def test_fixed_size_no_empty_trailing_group():
    groups = list(FixedSizePartitioner(7).groups(make_records(7)))
    assert group_sizes(groups) == [7]
    assert list(FixedSizePartitioner(3).groups([])) == []


def test_fixed_size_rejects_non_positive():
    with pytest.raises(ValueError):
        FixedSizePartitioner(0)


@pytest.mark.parametrize(
    "total, parts, size, achieved",
    [
        (10, 4, 3, 4),
        (10, 5, 2, 5),
        (10, 6, 2, 5),
        (10, 1, 10, 1),
        (3, 5, 1, 3),
        (11, 7, 2, 6),
        (0, 3, 0, 0),
    ],
)
def test_plan_parts(total, parts, size, achieved):
    plan = plan_parts(total, parts)
    assert plan.size == size
    assert plan.parts == achieved
    assert plan.requested == parts
    assert plan.total == total


def test_plan_parts_reports_correction(caplog):
    caplog.set_level(logging.INFO, logger="seqsplit.partition")
    plan_parts(10, 6)
    assert "corrected: split into 5 parts" in caplog.text

    caplog.clear()
    plan_parts(10, 5)
    assert "corrected" not in caplog.text


def test_part_count():
    partitioner = PartCountPartitioner(4)
    groups = list(partitioner.groups(make_records(10)))
    assert group_sizes(groups) == [3, 3, 3, 1]
    assert partitioner.plan.size == 3

    groups = list(PartCountPartitioner(5).groups(make_records(10)))
    assert group_sizes(groups) == [2, 2, 2, 2, 2]


def test_part_count_no_records():
    assert list(PartCountPartitioner(3).groups([])) == []


def test_part_count_with_total_streams():
    consumed = []

    def source():
        for record in make_records(10):
            consumed.append(record)
            yield record

    partitioner = PartCountPartitioner(4, total=10)
    groups = partitioner.groups(source())
    first = next(groups)
    assert len(first.records) == 3
    assert len(consumed) == 3
    assert group_sizes([first] + list(groups)) == [3, 3, 3, 1]


def test_by_identifier():
    records = [
        Record(name, f"{name} rec{i}", "ACGT", None)
        for (i, name) in enumerate(["A", "B", "A", "C", "B"], start=1)
    ]
    groups = list(IdentifierPartitioner().groups(records))
    assert [g.key for g in groups] == ["A", "B", "C"]
    assert [[r.description for r in g.records] for g in groups] == [
        ["A rec1", "A rec3"],
        ["B rec2", "B rec5"],
        ["C rec4"],
    ]


def test_by_region():
    records = [
        Record("r1", "r1", "ACGTTT", None),
        Record("r2", "r2", "GGGTTT", None),
        Record("r3", "r3", "ACGAAA", None),
        Record("r4", "r4", "A", None),
        Record("r5", "r5", "", None),
    ]
    groups = list(RegionPartitioner(Region(1, 3)).groups(records))
    assert [g.key for g in groups] == ["ACG", "GGG", "A", ""]
    assert [r.id for r in groups[0].records] == ["r1", "r3"]

    # same grouping with digests, only the keys change
    digested = list(RegionPartitioner(Region(1, 3), digest=True).groups(records))
    assert [g.key for g in digested] == [md5_hex(g.key) for g in groups]
    assert [g.records for g in digested] == [g.records for g in groups]


def test_by_region_empty_ranges_share_key():
    records = [Record(f"r{i}", f"r{i}", "AC", None) for i in range(3)]
    groups = list(RegionPartitioner(Region(5, 8)).groups(records))
    assert len(groups) == 1
    assert groups[0].key == ""
    assert len(groups[0].records) == 3


def test_labels():
    assert FixedSizePartitioner(2).label(1) == "part_001"
    assert FixedSizePartitioner(2).label(1000) == "part_1000"
    assert IdentifierPartitioner().label("seq1") == "id_seq1"
    assert RegionPartitioner(Region(-4, -2)).label("cgt") == "region_-4:-2_cgt"


def test_split_routes_groups():
    router = OutputRouter("reads", ".fa", dry_run=True)
    written = FixedSizePartitioner(3).split(make_records(7), router)
    assert written == [
        ("reads.part_001.fa", 3),
        ("reads.part_002.fa", 3),
        ("reads.part_003.fa", 1),
    ]


@pytest.mark.parametrize(
    "kwargs, cls",
    [
        ({"by_size": 3}, FixedSizePartitioner),
        ({"by_part": 3}, PartCountPartitioner),
        ({"by_id": True}, IdentifierPartitioner),
        ({"by_region": "1:3"}, RegionPartitioner),
    ],
)
def test_make_partitioner(kwargs, cls):
    partitioner = make_partitioner(select_mode(**kwargs))
    assert type(partitioner) is cls


def test_make_partitioner_region_digest():
    partitioner = make_partitioner(select_mode(by_region="2:-2", md5=True))
    assert partitioner.region == Region(2, -2)
    assert partitioner.digest


def test_part_count_size_before_plan():
    partitioner = PartCountPartitioner(3)
    assert partitioner.size is None
    assert partitioner.plan is None

    plan = partitioner.set_total(10)
    assert partitioner.size == plan.size == 4
    assert plan.parts == 3
