"""Tests for the continuous and distributed placement strategies."""
import pytest

from nightduty.models.rules import RuleSet
from nightduty.models.staff import Staff
from nightduty.solver.base import PlacementContext, by_priority, split_by_gender
from nightduty.solver.calendar import build_day_list
from nightduty.solver.continuous import ContinuousStrategy, find_continuous_window
from nightduty.solver.distributed import (
    DistributedStrategy,
    assign_distributed_for_staff,
    candidate_dates,
    pick_spaced,
)


def make_ctx(start="2025-03-01", end="2025-03-10", **kwargs):
    rules = kwargs.pop("rules", RuleSet(
        reduction_enabled=False, compensation_enabled=False, menstrual_restriction=False,
    ))
    return PlacementContext(days=build_day_list(start, end), rules=rules, **kwargs)


def offsets_of(ctx, dates):
    return [ctx.offsets[d] for d in dates]


class TestGrouping:
    """Tests for cohort split and priority order."""

    def test_split_skips_unknown_gender(self):
        staff = [Staff(staff_id="a", gender="M"), Staff(staff_id="b", gender="F"), Staff(staff_id="c")]
        group_a, group_b = split_by_gender(staff)
        assert [s.staff_id for s in group_a] == ["a"]
        assert [s.staff_id for s in group_b] == ["b"]

    def test_priority_is_stable_ascending(self):
        staff = [
            Staff(staff_id="x", prior_night_days=3),
            Staff(staff_id="y", prior_night_days=0),
            Staff(staff_id="z", prior_night_days=3),
        ]
        assert [s.staff_id for s in by_priority(staff)] == ["y", "x", "z"]


class TestFindContinuousWindow:
    """Tests for the first-fit window scan."""

    @pytest.fixture
    def days(self):
        return build_day_list("2025-03-01", "2025-03-10")

    def test_first_window(self, days):
        assert find_continuous_window(days, 3, set()) == ["2025-03-01", "2025-03-02", "2025-03-03"]

    def test_skips_blocked(self, days):
        window = find_continuous_window(days, 3, {"2025-03-02"})
        assert window == ["2025-03-03", "2025-03-04", "2025-03-05"]

    def test_no_window(self, days):
        blocked = {d.date_str for d in days[::2]}
        assert find_continuous_window(days, 2, blocked) is None

    def test_longer_than_period(self, days):
        assert find_continuous_window(days, 11, set()) is None

    def test_whole_period(self, days):
        assert len(find_continuous_window(days, 10, set())) == 10


class TestContinuousStrategy:
    """Tests for continuous placement."""

    def test_two_cohorts_get_distinct_blocks(self):
        """One A and one B, quota 2 each, ten free days."""
        ctx = make_ctx(rules=RuleSet(
            male_days=2, female_days=2,
            reduction_enabled=False, compensation_enabled=False, menstrual_restriction=False,
        ))
        staff = [Staff(staff_id="b1", gender="F"), Staff(staff_id="a1", gender="M")]
        schedule = ContinuousStrategy(ctx).run(staff, {})

        assert sorted(schedule["a1"]) == ["2025-03-01", "2025-03-02"]
        assert sorted(schedule["b1"]) == ["2025-03-03", "2025-03-04"]
        assert ctx.errors == []

    def test_lower_prior_gets_first_pick(self):
        ctx = make_ctx()
        staff = [
            Staff(staff_id="busy", gender="M", prior_night_days=5),
            Staff(staff_id="fresh", gender="M", prior_night_days=0),
        ]
        schedule = ContinuousStrategy(ctx).run(staff, {})
        assert sorted(schedule["fresh"]) == ["2025-03-01", "2025-03-02", "2025-03-03", "2025-03-04"]
        assert sorted(schedule["busy"]) == ["2025-03-05", "2025-03-06", "2025-03-07", "2025-03-08"]

    def test_block_length_ignores_adjusted_quota(self):
        """The block uses the raw group quota, not the per-person quota."""
        ctx = make_ctx()
        staff = [Staff(staff_id="a", gender="M")]
        schedule = ContinuousStrategy(ctx).run(staff, {"a": 1})
        assert len(schedule["a"]) == 4

    def test_block_avoids_exclusions(self):
        ctx = make_ctx(
            rest_days={"2025-03-02": True},
            personal_requests={"a": {"2025-03-06": "REQ"}},
        )
        schedule = ContinuousStrategy(ctx).run([Staff(staff_id="a", gender="F")], {})
        assert sorted(schedule["a"]) == ["2025-03-03", "2025-03-04", "2025-03-05"]

    def test_menstrual_window_respected(self):
        rules = RuleSet(reduction_enabled=False, compensation_enabled=False)
        ctx = make_ctx(rules=rules)
        staff = [Staff(staff_id="f", gender="F", cycle_half="upper")]
        schedule = ContinuousStrategy(ctx).run(staff, {})
        assert sorted(schedule["f"]) == ["2025-03-06", "2025-03-07", "2025-03-08"]

    def test_blocks_are_contiguous(self):
        ctx = make_ctx(end="2025-03-31")
        staff = [Staff(staff_id=f"s{i}", gender="M" if i % 2 else "F") for i in range(6)]
        schedule = ContinuousStrategy(ctx).run(staff, {})
        for cells in schedule.values():
            pos = sorted(offsets_of(ctx, cells))
            assert pos == list(range(pos[0], pos[0] + len(pos)))

    def test_fallback_when_period_too_short(self):
        """Two days for a four-day block: distributed fallback, no exception."""
        ctx = make_ctx(end="2025-03-02")
        schedule = ContinuousStrategy(ctx).run([Staff(staff_id="a", gender="M")], {})

        assert sorted(schedule["a"]) == ["2025-03-01", "2025-03-02"]
        assert any("continuous block" in e for e in ctx.errors)
        assert any("only 2 of 4" in e for e in ctx.errors)

    def test_fallback_uses_fixed_spacing(self):
        """The fallback spaces by seven days whatever min_interval_days says."""
        ctx = make_ctx(
            end="2025-03-14",
            rest_days={"2025-03-04": True, "2025-03-08": True, "2025-03-12": True},
            rules=RuleSet(
                min_interval_days=2,
                reduction_enabled=False, compensation_enabled=False, menstrual_restriction=False,
            ),
        )
        schedule = ContinuousStrategy(ctx).run([Staff(staff_id="a", gender="M")], {})

        assert list(schedule["a"]) == ["2025-03-01", "2025-03-02", "2025-03-03", "2025-03-09"]
        assert any("interval of 7 days relaxed" in e for e in ctx.errors)

    def test_fallback_shares_used_dates(self):
        ctx = make_ctx(end="2025-03-05")
        staff = [Staff(staff_id="a", gender="M"), Staff(staff_id="b", gender="M")]
        schedule = ContinuousStrategy(ctx).run(staff, {})

        assert sorted(schedule["a"]) == ["2025-03-01", "2025-03-02", "2025-03-03", "2025-03-04"]
        assert sorted(schedule["b"]) == ["2025-03-05"]
        assert not set(schedule["a"]) & set(schedule["b"])


class TestPickSpaced:
    """Tests for the greedy spaced selection."""

    def test_interval_honoured(self):
        candidates = [(i, f"d{i}") for i in range(10)]
        accepted, relaxed = pick_spaced(candidates, 3, 3)
        assert accepted == ["d0", "d3", "d6"]
        assert relaxed is False

    def test_first_pick_immediate(self):
        accepted, _ = pick_spaced([(0, "d0")], 1, 30)
        assert accepted == ["d0"]

    def test_relaxed_when_short(self):
        candidates = [(i, f"d{i}") for i in range(10)]
        accepted, relaxed = pick_spaced(candidates, 3, 7)
        assert accepted == ["d0", "d7", "d1"]
        assert relaxed is True

    def test_exhausted_candidates(self):
        accepted, _ = pick_spaced([(0, "d0"), (1, "d1")], 5, 1)
        assert accepted == ["d0", "d1"]

    def test_candidate_dates_skip_blocked(self):
        days = build_day_list("2025-03-01", "2025-03-03")
        assert candidate_dates(days, {"2025-03-02"}) == [(0, "2025-03-01"), (2, "2025-03-03")]


class TestDistributedStrategy:
    """Tests for distributed placement."""

    def test_spaced_offsets(self):
        """Quota 3, interval 3, ten free days: offsets 0, 3, 6."""
        ctx = make_ctx()
        staff = Staff(staff_id="a", gender="M")
        accepted = assign_distributed_for_staff(ctx, staff, 3, 3)

        assert offsets_of(ctx, accepted) == [0, 3, 6]
        assert list(ctx.schedule["a"]) == ["2025-03-01", "2025-03-04", "2025-03-07"]
        assert ctx.errors == []

    def test_quota_met_when_feasible(self):
        """Enough free days for quota + interval × quota: exact quota."""
        ctx = make_ctx(end="2025-03-31")
        accepted = assign_distributed_for_staff(ctx, Staff(staff_id="a", gender="F"), 3, 7)
        assert len(accepted) == 3
        pos = offsets_of(ctx, accepted)
        assert all(b - a >= 7 for a, b in zip(pos, pos[1:]))

    def test_relaxation_recorded(self):
        ctx = make_ctx()
        accepted = assign_distributed_for_staff(ctx, Staff(staff_id="a", gender="M"), 3, 7)
        assert sorted(accepted) == ["2025-03-01", "2025-03-02", "2025-03-08"]
        assert any("relaxed" in e for e in ctx.errors)

    def test_written_chronologically(self):
        ctx = make_ctx()
        assign_distributed_for_staff(ctx, Staff(staff_id="a", gender="M"), 3, 7)
        assert list(ctx.schedule["a"]) == sorted(ctx.schedule["a"])

    def test_under_assignment_recorded(self):
        ctx = make_ctx(end="2025-03-02", rest_days={"2025-03-01": True})
        accepted = assign_distributed_for_staff(ctx, Staff(staff_id="a", gender="M"), 3, 1)
        assert accepted == ["2025-03-02"]
        assert any("only 1 of 3" in e for e in ctx.errors)

    def test_per_person_quotas_and_priority(self):
        ctx = make_ctx(rules=RuleSet(
            male_days=2, min_interval_days=3, arrangement_mode="distributed",
            reduction_enabled=False, menstrual_restriction=False,
        ))
        staff = [
            Staff(staff_id="busy", gender="M", prior_night_days=4),
            Staff(staff_id="fresh", gender="M"),
        ]
        schedule = DistributedStrategy(ctx).run(staff, {"busy": 1, "fresh": 2})

        assert list(schedule["fresh"]) == ["2025-03-01", "2025-03-04"]
        assert list(schedule["busy"]) == ["2025-03-02"]

    def test_group_a_before_group_b(self):
        ctx = make_ctx(rules=RuleSet(
            min_interval_days=1, arrangement_mode="distributed",
            reduction_enabled=False, compensation_enabled=False, menstrual_restriction=False,
        ))
        staff = [Staff(staff_id="f", gender="F"), Staff(staff_id="m", gender="M")]
        schedule = DistributedStrategy(ctx).run(staff, {"f": 1, "m": 1})
        assert list(schedule["m"]) == ["2025-03-01"]
        assert list(schedule["f"]) == ["2025-03-02"]
