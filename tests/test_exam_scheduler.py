"""Tests for exam timetabling: slot coloring, overflow and conflict reporting."""
import logging

import pytest

from examroster.config import SchedulerConfig
from examroster.graph_build import build_conflict_graph
from examroster.scheduling.assign_timeslots import schedule_exams
from examroster.scheduling.validation import InvalidInputError, conflicts_ok

# 2-hour exams, no breaks: four slots per day
FOUR_SLOT_DAY = SchedulerConfig(exam_duration_hours=2, break_hours=0)


def _placements(timetable):
    return [c for courses in timetable.values() for c in courses]


def test_chain_gets_distinct_slots_when_enough() -> None:
    enrollment = {"s1": ["A", "B"], "s2": ["B", "C"]}
    result = schedule_exams(enrollment, ["A", "B", "C"], days=2)
    assert result.conflicts == 0
    assert result.conflict_details == []
    assert result.overflow == []
    assert result.course_slots["A"] != result.course_slots["B"]
    assert result.course_slots["B"] != result.course_slots["C"]


def test_chain_with_four_slots_in_one_day() -> None:
    result = schedule_exams({"s1": ["A", "B"], "s2": ["B", "C"]}, ["A", "B", "C"], days=1,
                            config=FOUR_SLOT_DAY)
    assert result.conflicts == 0
    assert result.course_slots == {"A": 0, "B": 1, "C": 0}


def test_three_way_clash_with_two_slots_overflows() -> None:
    result = schedule_exams({"s1": ["A", "B", "C"]}, ["A", "B", "C"], days=1)
    assert len(result.time_slots) == 2
    assert result.overflow == ["C"]
    assert result.course_slots["C"] == 0
    assert result.conflicts == 1
    assert len(result.conflict_details) == 1
    detail = result.conflict_details[0]
    assert detail.student == "s1"
    assert detail.slot == 0
    assert detail.courses == ["A", "C"]
    assert not result.is_conflict_free


def test_empty_course_list() -> None:
    result = schedule_exams({"s1": ["A", "B"]}, [], days=1)
    assert result.timetable == {}
    assert result.conflicts == 0
    assert result.conflict_details == []


def test_empty_enrollment_puts_everything_in_first_slot() -> None:
    result = schedule_exams({}, ["A", "B"], days=1)
    assert result.timetable == {"Day 1, Slot 1 (9:00-12:00)": ["A", "B"]}
    assert result.conflicts == 0
    assert result.overflow == []


def test_every_course_appears_exactly_once() -> None:
    enrollment = {
        "s1": ["A", "B", "C", "D"],
        "s2": ["B", "E"],
        "s3": ["C", "E", "F"],
        "s4": ["A", "F", "G"],
    }
    courses = ["A", "B", "C", "D", "E", "F", "G"]
    result = schedule_exams(enrollment, courses, days=1)
    placed = _placements(result.timetable)
    assert sorted(placed) == sorted(courses)
    assert len(placed) == len(set(placed))


def test_conflict_total_matches_details() -> None:
    enrollment = {"s1": ["A", "B", "C", "D"], "s2": ["A", "B", "C"], "s3": ["C", "D"]}
    result = schedule_exams(enrollment, ["A", "B", "C", "D"], days=1)
    assert result.conflicts > 0
    assert result.conflicts == sum(len(d.courses) - 1 for d in result.conflict_details)
    assert all(len(d.courses) >= 2 for d in result.conflict_details)


def test_unrelated_courses_share_a_slot_without_conflict() -> None:
    result = schedule_exams({"s1": ["A"], "s2": ["B"]}, ["A", "B"], days=1)
    assert result.course_slots["A"] == result.course_slots["B"]
    assert result.conflict_details == []


def test_no_overflow_means_valid_coloring() -> None:
    enrollment = {"s1": ["A", "B"], "s2": ["C", "D"], "s3": ["A", "D"]}
    courses = ["A", "B", "C", "D"]
    result = schedule_exams(enrollment, courses, days=2)
    assert result.overflow == []
    G = build_conflict_graph(enrollment, courses)
    assert conflicts_ok(G, result.course_slots)


def test_deterministic() -> None:
    enrollment = {f"s{i}": [f"C{(i * 7 + j) % 12}" for j in range(4)] for i in range(30)}
    courses = [f"C{i}" for i in range(12)]
    first = schedule_exams(enrollment, courses, days=2)
    second = schedule_exams(enrollment, courses, days=2)
    assert first.to_dict() == second.to_dict()


def test_courses_outside_list_excluded_from_output() -> None:
    result = schedule_exams({"s1": ["A", "X"]}, ["A"], days=1)
    assert _placements(result.timetable) == ["A"]
    assert result.conflicts == 0


def test_course_list_mismatches_are_reported(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        result = schedule_exams({"s1": ["A", "TYPO"]}, ["A", "B"], days=1)
    assert result.unknown_courses == ["TYPO"]
    assert result.unenrolled_courses == ["B"]
    assert sorted(_placements(result.timetable)) == ["A", "B"]
    assert "not in the course list" in caplog.text and "TYPO" in caplog.text
    assert "no enrolled students" in caplog.text
    data = result.to_dict()
    assert data["unknownCourses"] == ["TYPO"]
    assert data["unenrolledCourses"] == ["B"]


def test_long_mismatch_lists_are_shortened_in_logs(caplog) -> None:
    enrollment = {"s1": [f"X{i}" for i in range(12)]}
    with caplog.at_level(logging.WARNING):
        result = schedule_exams(enrollment, ["A"], days=1)
    assert len(result.unknown_courses) == 12
    assert "+7 more" in caplog.text
    assert "X11" not in caplog.text


def test_result_keeps_conflict_graph() -> None:
    result = schedule_exams({"s1": ["A", "B"], "s2": ["B", "C"]}, ["A", "B", "C"], days=2)
    assert sorted(result.graph.nodes) == ["A", "B", "C"]
    assert result.graph.number_of_edges() == 2


def test_timetable_keys_are_chronological() -> None:
    enrollment = {"s1": ["A", "B", "C", "D"]}
    result = schedule_exams(enrollment, ["A", "B", "C", "D"], days=2)
    assert list(result.timetable) == [
        "Day 1, Slot 1 (9:00-12:00)",
        "Day 1, Slot 2 (12.5:00-15.5:00)",
        "Day 2, Slot 1 (9:00-12:00)",
        "Day 2, Slot 2 (12.5:00-15.5:00)",
    ]


def test_largest_first_reduces_overflow() -> None:
    # path P-Q-R-S; visiting both ends first strands R with two slots
    enrollment = {"s1": ["P", "Q"], "s2": ["Q", "R"], "s3": ["R", "S"]}
    courses = ["P", "S", "Q", "R"]
    sequential = schedule_exams(enrollment, courses, days=1)
    ordered = schedule_exams(enrollment, courses, days=1, strategy="largest_first")
    assert sequential.overflow == ["R"]
    assert sequential.conflicts == 1
    assert ordered.overflow == []
    assert ordered.conflicts == 0


def test_unknown_strategy_rejected() -> None:
    with pytest.raises(ValueError):
        schedule_exams({"s1": ["A"]}, ["A"], days=1, strategy="random")


@pytest.mark.parametrize("days", [0, -1, 1.5, "2", True])
def test_invalid_days(days) -> None:
    with pytest.raises(InvalidInputError):
        schedule_exams({"s1": ["A"]}, ["A"], days=days)


def test_course_ceiling() -> None:
    cfg = SchedulerConfig(max_courses=2)
    with pytest.raises(InvalidInputError, match="limit"):
        schedule_exams({}, ["A", "B", "C"], days=1, config=cfg)


def test_no_slot_fits_the_day() -> None:
    with pytest.raises(InvalidInputError):
        schedule_exams({}, ["A"], days=1, config=SchedulerConfig(exam_duration_hours=10))


def test_slots_per_day_mismatch_only_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        result = schedule_exams({"s1": ["A", "B"]}, ["A", "B"], days=1, slots_per_day=4)
    assert result.conflicts == 0
    assert "slots per day" in caplog.text
