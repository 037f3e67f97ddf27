"""
Tests for the conflict reconciler — the guard's decision table.
"""

import itertools

import pytest

from litguard.core.engine.reconciler import Blocked, Proceed, find_conflicts, reconcile
from litguard.core.models.state import BuildState

SOURCES = frozenset({"README.adoc", "asciidoctrine/asciidoctrine.adoc", "lisi/lisi.adoc"})

ALL_STATES = list(BuildState)


def _decide(modified, would_write, prior, sources=SOURCES):
    return reconcile(
        frozenset(modified),
        {path: "opaque" for path in would_write},
        sources,
        prior,
    )


class TestFindConflicts:
    def test_intersection(self):
        assert find_conflicts({"a", "b"}, {"b": 1, "c": 2}) == frozenset({"b"})

    def test_disjoint(self):
        assert find_conflicts({"a"}, {"b": 1}) == frozenset()

    def test_empty(self):
        assert find_conflicts(set(), {"b": 1}) == frozenset()


class TestConflicts:
    @pytest.mark.parametrize(
        "prior", [BuildState.SYNC, BuildState.MANUAL_CHANGES]
    )
    def test_blocks_unless_literate_changes(self, prior):
        decision = _decide({"lisi/src/lib.rs"}, {"lisi/src/lib.rs"}, prior)
        assert isinstance(decision, Blocked)
        assert decision.blocked
        assert decision.conflicts == frozenset({"lisi/src/lib.rs"})
        assert decision.new_state is BuildState.MANUAL_CHANGES

    def test_proceeds_after_literate_changes(self):
        """Regeneration of previously tracked literate edits is expected."""
        decision = _decide(
            {"lisi/src/lib.rs", "lisi/lisi.adoc"},
            {"lisi/src/lib.rs"},
            BuildState.LITERATE_CHANGES,
        )
        assert isinstance(decision, Proceed)
        assert not decision.blocked
        assert decision.new_state is BuildState.LITERATE_CHANGES
        assert decision.conflicts == frozenset({"lisi/src/lib.rs"})
        assert decision.touched_sources == frozenset({"lisi/lisi.adoc"})

    def test_blocked_reports_only_conflicts(self):
        decision = _decide(
            {"docs/out.md", "notes.txt"},
            {"docs/out.md", "docs/other.md"},
            BuildState.SYNC,
        )
        assert decision.conflicts == frozenset({"docs/out.md"})

    def test_literate_touch_does_not_lift_block(self):
        decision = _decide(
            {"README.adoc", "lisi/src/lib.rs"},
            {"lisi/src/lib.rs"},
            BuildState.SYNC,
        )
        assert decision.blocked
        assert decision.touched_sources == frozenset({"README.adoc"})


class TestNoConflicts:
    @pytest.mark.parametrize("prior", ALL_STATES)
    def test_nothing_modified_is_sync(self, prior):
        decision = _decide(set(), {"src/gen.rs"}, prior)
        assert decision == Proceed(new_state=BuildState.SYNC)

    @pytest.mark.parametrize("prior", ALL_STATES)
    def test_unrelated_edits_are_sync(self, prior):
        decision = _decide({"notes.txt"}, {"src/gen.rs"}, prior)
        assert isinstance(decision, Proceed)
        assert decision.new_state is BuildState.SYNC

    @pytest.mark.parametrize("prior", ALL_STATES)
    def test_literate_edit_is_literate_changes(self, prior):
        decision = _decide({"README.adoc"}, {"src/gen.rs"}, prior)
        assert isinstance(decision, Proceed)
        assert decision.new_state is BuildState.LITERATE_CHANGES
        assert decision.touched_sources == frozenset({"README.adoc"})

    def test_empty_dry_run(self):
        decision = _decide({"lisi/lisi.adoc"}, set(), BuildState.MANUAL_CHANGES)
        assert decision.new_state is BuildState.LITERATE_CHANGES

    def test_no_sources_configured(self):
        decision = _decide({"README.adoc"}, {"x"}, BuildState.SYNC, sources=frozenset())
        assert decision.new_state is BuildState.SYNC


class TestScenarios:
    def test_manual_edit_of_generated_file(self):
        decision = _decide({"docs/out.md"}, {"docs/out.md", "docs/other.md"}, BuildState.SYNC)
        assert decision.blocked
        assert decision.conflicts == frozenset({"docs/out.md"})
        assert decision.new_state is BuildState.MANUAL_CHANGES

    def test_literate_source_edit(self):
        decision = _decide({"README.adoc"}, {"src/gen.rs"}, BuildState.SYNC)
        assert not decision.blocked
        assert decision.new_state is BuildState.LITERATE_CHANGES

    def test_clean_tree(self):
        for prior in ALL_STATES:
            assert _decide(set(), {"a", "b"}, prior).new_state is BuildState.SYNC


class TestProperties:
    FILES = ["README.adoc", "lisi/lisi.adoc", "lisi/src/lib.rs", "docs/out.md", "notes.txt"]

    def _subsets(self):
        for n in range(len(self.FILES) + 1):
            yield from itertools.combinations(self.FILES, n)

    def test_total_and_deterministic(self):
        for modified, would_write, prior in itertools.product(
            self._subsets(), self._subsets(), ALL_STATES
        ):
            first = _decide(modified, would_write, prior)
            assert first == _decide(modified, would_write, prior)
            assert first.new_state in ALL_STATES
            assert isinstance(first, (Proceed, Blocked))

    def test_disjoint_never_blocks(self):
        for modified, would_write, prior in itertools.product(
            self._subsets(), self._subsets(), ALL_STATES
        ):
            if set(modified) & set(would_write):
                continue
            assert not _decide(modified, would_write, prior).blocked

    def test_blocks_iff_conflict_without_literate_history(self):
        for modified, would_write, prior in itertools.product(
            self._subsets(), self._subsets(), ALL_STATES
        ):
            conflict = bool(set(modified) & set(would_write))
            expected = conflict and prior is not BuildState.LITERATE_CHANGES
            assert _decide(modified, would_write, prior).blocked is expected

    def test_idempotent_on_clean_tree(self):
        for prior in ALL_STATES:
            first = _decide(set(), {"src/gen.rs"}, prior)
            second = _decide(set(), {"src/gen.rs"}, first.new_state)
            assert second == first


class TestToDict:
    def test_proceed(self):
        data = Proceed(new_state=BuildState.SYNC).to_dict()
        assert data == {
            "decision": "proceed",
            "new_state": "sync",
            "conflicts": [],
            "touched_sources": [],
        }

    def test_blocked(self):
        data = Blocked(conflicts=frozenset({"b", "a"})).to_dict()
        assert data["decision"] == "blocked"
        assert data["new_state"] == "manual code changes"
        assert data["conflicts"] == ["a", "b"]
