"""Tests for the synthetic dataset generator."""
import pytest

from examroster.pipeline import build_schedule
from examroster.synthetic import generate_dataset


def test_shapes_and_bounds() -> None:
    enrollment, courses, availability = generate_dataset(50, 12, 5, seed=7)
    assert len(enrollment) == 50
    assert len(courses) == len(set(courses)) == 12
    assert len(availability) == 5
    for taken in enrollment.values():
        assert 3 <= len(taken) <= 6
        assert len(taken) == len(set(taken))
        assert set(taken) <= set(courses)
    for intervals in availability.values():
        for start, end in intervals:
            assert 9 <= start < end <= 17


def test_same_seed_same_data() -> None:
    assert generate_dataset(20, 8, 4, seed=3) == generate_dataset(20, 8, 4, seed=3)


def test_generated_data_schedules() -> None:
    enrollment, courses, availability = generate_dataset(40, 10, 6, seed=11)
    report = build_schedule(enrollment, courses, availability, ["2026-12-01", "2026-12-02", "2026-12-03"])
    placed = [c for lst in report.exams.timetable.values() for c in lst]
    assert sorted(placed) == sorted(courses)


def test_rejects_bad_sizes() -> None:
    with pytest.raises(ValueError):
        generate_dataset(10, 0, 2)
    with pytest.raises(ValueError):
        generate_dataset(10, 5, 2, min_courses_per_student=4, max_courses_per_student=2)
