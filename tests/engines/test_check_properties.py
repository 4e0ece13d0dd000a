"""
Property-based tests for the ledger checks.

Generates random ledgers and verifies the duplicate and sync checks against
independent reference computations.
"""

from collections import Counter

from hypothesis import given, settings
from hypothesis import strategies as st

from inventory_kernel.domain.entities import InventoryRecord, Part
from inventory_kernel.selectors import SnapshotSelector
from inventory_engines.diagnostics.checks import DuplicateRecordsCheck, InventorySyncCheck
from inventory_engines.diagnostics.types import CheckStatus

PART_IDS = ["P1", "P2", "P3", "P4"]
LOCATION_IDS = ["WH", "T1", "T2"]

ledger_rows = st.lists(
    st.tuples(
        st.sampled_from(PART_IDS),
        st.sampled_from(LOCATION_IDS),
        st.integers(min_value=0, max_value=50),
    ),
    max_size=30,
)


def _records(rows):
    return [
        InventoryRecord(id=f"r{i}", part_id=p, location_id=loc, quantity=q)
        for i, (p, loc, q) in enumerate(rows)
    ]


class TestDuplicateProperties:
    @settings(max_examples=100)
    @given(rows=ledger_rows)
    def test_evidence_count_is_rows_minus_distinct_keys(self, rows):
        gw = SnapshotSelector(inventory_records=_records(rows))
        outcome = DuplicateRecordsCheck().evaluate(gw)

        keys = [(p, loc) for p, loc, _ in rows]
        expected = len(keys) - len(set(keys))
        assert len(outcome.evidence) == expected
        assert (outcome.status == CheckStatus.FAIL) == (expected > 0)

    @settings(max_examples=100)
    @given(rows=ledger_rows)
    def test_each_key_reported_occurrences_minus_one(self, rows):
        gw = SnapshotSelector(inventory_records=_records(rows))
        outcome = DuplicateRecordsCheck().evaluate(gw)

        reported = Counter((d.part_id, d.location_id) for d in outcome.evidence)
        for key, count in Counter((p, loc) for p, loc, _ in rows).items():
            assert reported.get(key, 0) == count - 1


class TestSyncProperties:
    @settings(max_examples=100)
    @given(rows=ledger_rows)
    def test_aggregates_equal_to_ledger_sums_pass(self, rows):
        totals = Counter()
        for p, _, q in rows:
            totals[p] += q
        parts = [Part(id=p, name=p, quantity_on_hand=totals[p]) for p in PART_IDS]

        gw = SnapshotSelector(parts=parts, inventory_records=_records(rows))
        assert InventorySyncCheck().evaluate(gw).status == CheckStatus.PASS

    @settings(max_examples=100)
    @given(
        rows=ledger_rows,
        drift=st.dictionaries(
            st.sampled_from(PART_IDS),
            st.integers(min_value=-5, max_value=5).filter(lambda d: d != 0),
        ),
    )
    def test_exactly_drifting_parts_reported(self, rows, drift):
        totals = Counter()
        for p, _, q in rows:
            totals[p] += q
        parts = [
            Part(id=p, name=p, quantity_on_hand=totals[p] + drift.get(p, 0))
            for p in PART_IDS
        ]

        gw = SnapshotSelector(parts=parts, inventory_records=_records(rows))
        outcome = InventorySyncCheck().evaluate(gw)

        assert {m.part_id for m in outcome.evidence} == set(drift)
        for m in outcome.evidence:
            assert m.difference == drift[m.part_id]
