# rotation_scheduler/tests/unit/test_scheduler.py

"""
Tests for RotationScheduler.

Tests cover:
- Schedule generation under daily and weekly capacity limits
- Re-optimization around locked activities
- Fail-fast errors before any evolution starts
- Validation of hand-made schedules, including date-specific conflicts
- Working-set and configuration updates
"""

from datetime import date, timedelta

import pytest

from rotation_scheduler import (
    Activity,
    Assignment,
    Day,
    HardConstraints,
    InvalidConfigurationError,
    LockedAssignmentConflictError,
    NoActivitiesError,
    NoScheduleError,
    RandomSource,
    RotationScheduler,
    Schedule,
    SchedulingConstraints,
    SchedulingEngineConfig,
    TimeSlot,
    generate_all_time_slots,
)
from rotation_scheduler.utils import timings


def capacity(**hard):
    return SchedulingConstraints(hard=HardConstraints(**hard))


@pytest.fixture
def scheduler(activities, small_config):
    return RotationScheduler(activities, config=small_config, rng=RandomSource(42))


class TestGenerateSchedule:
    def test_one_gene_per_activity(self, scheduler, activities):
        schedule = scheduler.generate_schedule()

        assert sorted(schedule.activity_ids()) == sorted(a.id for a in activities)
        assert schedule.is_valid
        assert scheduler.current_schedule is schedule

    def test_daily_maximum_respected(self, make_activities):
        scheduler = RotationScheduler(
            make_activities(10),
            constraints=capacity(daily_max_classes=2),
            rng=RandomSource(2024),
        )
        schedule = scheduler.generate_schedule()

        assert schedule.hard_constraint_violations == 0
        assert all(count <= 2 for count in schedule.daily_counts().values())

    def test_weekly_maximum_truncates_run(self, small_config, make_activities):
        scheduler = RotationScheduler(
            make_activities(10),
            constraints=capacity(weekly_max_classes=5),
            config=small_config,
            rng=RandomSource(1),
        )
        schedule = scheduler.generate_schedule()

        assert len(schedule.assignments) <= 5
        assert len(set(schedule.activity_ids())) == len(schedule.assignments)

    def test_single_legal_slot_is_used(
        self, small_config, monday_one, make_activities
    ):
        only_monday_one = [s for s in generate_all_time_slots() if s != monday_one]
        activities = make_activities(3) + [
            Activity("picky", "Picky Class", conflicts=only_monday_one)
        ]
        scheduler = RotationScheduler(
            activities, config=small_config, rng=RandomSource(8)
        )
        schedule = scheduler.generate_schedule()

        assert schedule.hard_constraint_violations == 0
        assert schedule.slot_of("picky").key == monday_one.key

    def test_dated_conflict_outside_rotation_week(
        self, small_config, monday_one, make_activities
    ):
        picky = Activity(
            "picky",
            "Picky Class",
            conflicts=[s for s in generate_all_time_slots() if s != monday_one]
            + [TimeSlot(Day.MONDAY, 1, date(2024, 2, 5))],
        )
        scheduler = RotationScheduler(
            make_activities(3) + [picky],
            constraints=capacity(rotation_start_date=date(2024, 1, 8)),
            config=small_config,
            rng=RandomSource(15),
        )
        schedule = scheduler.generate_schedule()

        assert schedule.hard_constraint_violations == 0
        assert schedule.slot_of("picky").key == monday_one.key
        assert schedule.slot_of("picky").date == date(2024, 1, 8)

        after = scheduler.re_optimize_schedule(locked_activity_ids=["picky"])
        assert after.hard_constraint_violations == 0
        assert after.slot_of("picky").key == monday_one.key

    def test_rotation_dates(self, scheduler):
        schedule = scheduler.generate_schedule()

        assert schedule.start_date.weekday() == 0
        assert schedule.end_date == schedule.start_date + timedelta(days=4)
        assert [w.week_number for w in schedule.weeks] == [1]
        assert all(a.time_slot.date is not None for a in schedule.assignments)

    def test_configured_start_date(self, activities, small_config):
        scheduler = RotationScheduler(
            activities,
            constraints=capacity(rotation_start_date=date(2024, 1, 10)),
            config=small_config,
            rng=RandomSource(4),
        )
        schedule = scheduler.generate_schedule()

        assert schedule.start_date == date(2024, 1, 10)
        assert schedule.weeks[0].start_date == date(2024, 1, 8)

    def test_no_activities(self, small_config):
        with pytest.raises(NoActivitiesError):
            RotationScheduler([], config=small_config).generate_schedule()

    def test_generation_is_timed(self, scheduler):
        timings.clear()
        scheduler.generate_schedule()
        assert timings.summary()["generate_schedule"]["count"] == 1


class TestReOptimize:
    def test_locked_activities_keep_their_slots(self, scheduler):
        before = scheduler.generate_schedule()
        locked = {"class1": before.slot_of("class1"), "class3": before.slot_of("class3")}

        after = scheduler.re_optimize_schedule(locked_activity_ids=["class1", "class3"])

        assert len(after.assignments) == len(before.assignments)
        for activity_id, slot in locked.items():
            assert after.slot_of(activity_id).key == slot.key

    def test_scope_follows_truncated_schedule(self, small_config, make_activities):
        scheduler = RotationScheduler(
            make_activities(8),
            constraints=capacity(weekly_max_classes=4),
            config=small_config,
            rng=RandomSource(6),
        )
        before = scheduler.generate_schedule()
        after = scheduler.re_optimize_schedule(
            locked_activity_ids=before.activity_ids()[:1]
        )
        assert sorted(after.activity_ids()) == sorted(before.activity_ids())

    def test_unknown_locked_ids_are_ignored(self, scheduler):
        before = scheduler.generate_schedule()
        after = scheduler.re_optimize_schedule(locked_activity_ids=["ghost"])
        assert len(after.assignments) == len(before.assignments)

    def test_no_schedule(self, scheduler):
        with pytest.raises(NoScheduleError):
            scheduler.re_optimize_schedule(locked_activity_ids=["class1"])

    def test_no_activities(self, small_config):
        scheduler = RotationScheduler([], config=small_config)
        with pytest.raises(NoActivitiesError):
            scheduler.re_optimize_schedule(Schedule())

    def test_locked_activities_sharing_a_slot(self, scheduler, monday_one):
        schedule = Schedule(
            assignments=[
                Assignment("class1", monday_one),
                Assignment("class2", monday_one),
                Assignment("class3", TimeSlot(Day.TUESDAY, 1)),
            ]
        )
        with pytest.raises(LockedAssignmentConflictError) as exc_info:
            scheduler.re_optimize_schedule(schedule, ["class1", "class2"])

        message = str(exc_info.value.message)
        assert "Classes class1, class2" in message
        assert "(Monday, period 1)" in message
        assert exc_info.value.activity_ids == ["class1", "class2"]

    def test_locked_activity_on_own_conflict(self, small_config, monday_one):
        activities = [
            Activity("yoga", "Yoga", conflicts=[monday_one]),
            Activity("spin", "Spin"),
        ]
        scheduler = RotationScheduler(activities, config=small_config)
        schedule = Schedule(
            assignments=[
                Assignment("yoga", monday_one),
                Assignment("spin", TimeSlot(Day.FRIDAY, 3)),
            ]
        )
        with pytest.raises(LockedAssignmentConflictError) as exc_info:
            scheduler.re_optimize_schedule(schedule, ["yoga"])
        assert "Class Yoga (yoga) is locked" in exc_info.value.message


class TestValidateSchedule:
    @pytest.fixture
    def dated_scheduler(self, small_config):
        today = date.today()
        activities = [
            Activity("class1", "Yoga", conflicts=[TimeSlot(Day.MONDAY, 1, today)]),
            Activity("class2", "Pilates", conflicts=[TimeSlot(Day.MONDAY, 2)]),
        ]
        return RotationScheduler(activities, config=small_config)

    def test_date_specific_conflict(self, dated_scheduler):
        result = dated_scheduler.validate_schedule(
            [Assignment("class1", TimeSlot(Day.MONDAY, 1, date.today()))]
        )
        assert result.is_valid is False
        assert result.hard_constraint_violations > 0
        assert len(result.violation_details) > 0

    def test_mixed_conflict_types(self, dated_scheduler):
        tomorrow = date.today() + timedelta(days=1)
        result = dated_scheduler.validate_schedule(
            [
                Assignment("class1", TimeSlot(Day.TUESDAY, 1, tomorrow)),
                Assignment("class2", TimeSlot(Day.TUESDAY, 2)),
            ]
        )
        assert result.is_valid is True
        assert result.hard_constraint_violations == 0
        assert result.violation_details == []

    def test_validates_schedule_objects(self, scheduler):
        schedule = scheduler.generate_schedule()
        result = scheduler.validate_schedule(schedule)
        assert result.fitness_score == schedule.fitness


class TestWorkingSet:
    def test_add_and_remove(self, scheduler):
        scheduler.add_activity(Activity("extra", "Extra"))
        assert scheduler.get_activity("extra") is not None

        assert scheduler.remove_activity("extra") is True
        assert scheduler.remove_activity("extra") is False

    def test_add_duplicate(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.add_activity(Activity("class1", "Again"))

    def test_update_rebuilds_evaluator(self, scheduler, monday_one):
        scheduler.update_activity(Activity("class1", "Class 1", conflicts=[monday_one]))
        result = scheduler.validate_schedule([Assignment("class1", monday_one)])
        assert result.hard_constraint_violations == 1

    def test_add_activity_conflict(self, scheduler, monday_one):
        assert scheduler.add_activity_conflict("class1", monday_one) is True
        again = TimeSlot(Day.MONDAY, 1)
        assert scheduler.add_activity_conflict("class1", again) is True
        assert scheduler.get_activity("class1").conflicts == [monday_one]

        result = scheduler.validate_schedule([Assignment("class1", monday_one)])
        assert result.hard_constraint_violations == 1

    def test_add_dated_activity_conflict(self, scheduler, monday_one):
        dated = TimeSlot(Day.MONDAY, 1, date(2024, 1, 8))
        scheduler.add_activity_conflict("class1", monday_one)
        scheduler.add_activity_conflict("class1", dated)

        conflicts = scheduler.get_activity("class1").conflicts
        assert [(s.key, s.date) for s in conflicts] == [
            (monday_one.key, None),
            (monday_one.key, date(2024, 1, 8)),
        ]

    def test_add_conflict_for_unknown_activity(self, scheduler, monday_one):
        assert scheduler.add_activity_conflict("ghost", monday_one) is False

    def test_update_missing_activity(self, scheduler):
        assert scheduler.update_activity(Activity("ghost", "Ghost")) is False

    def test_constraints_from_dict(self, scheduler):
        scheduler.set_constraints({"hard": {"daily_max_classes": 1}})
        assert [d.id for d in scheduler.constraint_definitions] == [
            "max-classes-per-day"
        ]
        scheduler.set_constraints(None)
        assert scheduler.constraint_definitions == []

    def test_update_config(self, scheduler):
        updated = scheduler.update_config(generations=5, mutation_rate=0.3)
        assert updated.generations == 5
        assert scheduler.config.genetic_algorithm.mutation_rate == 0.3

    def test_update_config_rejects_bad_values(self, scheduler):
        with pytest.raises(InvalidConfigurationError):
            scheduler.update_config(crossover_rate=2.0)
        assert scheduler.config.genetic_algorithm.crossover_rate == 0.8

    def test_config_is_per_instance(self, activities):
        first = RotationScheduler(activities, config=SchedulingEngineConfig())
        second = RotationScheduler(activities, config=SchedulingEngineConfig())
        first.update_config(generations=3)
        assert second.config.genetic_algorithm.generations == 100
