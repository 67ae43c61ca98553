import numbers
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import networkx as nx

from ..config import DEFAULT_CONFIG, SchedulerConfig
from ..models import ExamSlotRoster
from ..timeslots import parse_slot_label


class InvalidInputError(ValueError):
    """Raised when scheduling input is malformed or exceeds the size ceilings."""


def validate_days(days, config: Optional[SchedulerConfig] = None) -> int:
    cfg = config or DEFAULT_CONFIG
    if isinstance(days, bool) or not isinstance(days, numbers.Integral):
        raise InvalidInputError(f"days must be an integer, got {days!r}")
    if days < 1:
        raise InvalidInputError(f"days must be >= 1, got {days}")
    if days > cfg.max_days:
        raise InvalidInputError(f"days={days} exceeds the limit of {cfg.max_days}")
    return int(days)


def validate_exam_inputs(enrollment: Mapping, course_list: Sequence[str], days,
                         config: Optional[SchedulerConfig] = None) -> int:
    cfg = config or DEFAULT_CONFIG
    if not isinstance(enrollment, Mapping):
        raise InvalidInputError(f"enrollment must be a mapping, got {type(enrollment).__name__}")
    if isinstance(course_list, (str, bytes)):
        raise InvalidInputError("course_list must be a sequence of course ids, not a string")
    for sid, courses in enrollment.items():
        if isinstance(courses, (str, bytes)) or not isinstance(courses, Iterable):
            raise InvalidInputError(f"Courses for student '{sid}' must be a list of course ids")
    if len(course_list) > cfg.max_courses:
        raise InvalidInputError(f"{len(course_list)} courses exceeds the limit of {cfg.max_courses}")
    if len(enrollment) > cfg.max_students:
        raise InvalidInputError(f"{len(enrollment)} students exceeds the limit of {cfg.max_students}")
    return validate_days(days, cfg)


def _check_interval(faculty: str, interval, cfg: SchedulerConfig) -> Tuple[int, int]:
    try:
        start, end = interval
    except (TypeError, ValueError):
        raise InvalidInputError(
            f"Faculty '{faculty}' has a malformed interval {interval!r}; expected [start, end]"
        ) from None
    for h in (start, end):
        if isinstance(h, bool) or not isinstance(h, numbers.Real):
            raise InvalidInputError(f"Faculty '{faculty}' interval {interval!r} has a non-numeric hour")
    if not cfg.day_start <= start < end <= cfg.day_end:
        raise InvalidInputError(
            f"Faculty '{faculty}' interval {interval!r} must satisfy "
            f"{cfg.day_start} <= start < end <= {cfg.day_end}"
        )
    return start, end


def merge_intervals(intervals: Iterable[Tuple[int, int]]) -> List[Tuple[int, int]]:
    """Sort and coalesce overlapping or touching half-open intervals."""
    merged: List[Tuple[int, int]] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def normalize_availability(availability: Mapping, config: Optional[SchedulerConfig] = None
                           ) -> Dict[str, List[Tuple[int, int]]]:
    """Validate every interval and merge each faculty's list.

    Faculty keep the mapping's iteration order, which is the candidate order
    used when assigning invigilators.
    """
    cfg = config or DEFAULT_CONFIG
    if availability is None:
        return {}
    if not isinstance(availability, Mapping):
        raise InvalidInputError(f"faculty availability must be a mapping, got {type(availability).__name__}")
    if len(availability) > cfg.max_faculty:
        raise InvalidInputError(f"{len(availability)} faculty exceeds the limit of {cfg.max_faculty}")
    out: Dict[str, List[Tuple[int, int]]] = {}
    for faculty, intervals in availability.items():
        if intervals is None:
            intervals = []
        if isinstance(intervals, (str, bytes)) or not isinstance(intervals, Iterable):
            raise InvalidInputError(f"Availability for faculty '{faculty}' must be a list of intervals")
        checked = [_check_interval(faculty, iv, cfg) for iv in intervals]
        out[str(faculty)] = merge_intervals(checked)
    return out


# ---------------------------------------------------------------------
# Post-hoc checks
# ---------------------------------------------------------------------

def conflicts_ok(G: nx.Graph, course_slots: Mapping[str, int]) -> bool:
    for u, v in G.edges():
        if course_slots.get(u) == course_slots.get(v):
            return False
    return True


def _assignments_by_day(roster: Mapping[str, ExamSlotRoster]):
    for label, entry in roster.items():
        slot = parse_slot_label(label)
        day = slot.day if slot is not None else label
        for assigned in entry.assignments.values():
            for a in assigned:
                yield day, a


def roster_respects_daily_cap(roster: Mapping[str, ExamSlotRoster], cap: int = 1) -> bool:
    counts = Counter((day, a.faculty) for day, a in _assignments_by_day(roster))
    return all(n <= cap for n in counts.values())


def roster_respects_availability(roster: Mapping[str, ExamSlotRoster],
                                 availability: Mapping[str, List[Tuple[int, int]]]) -> bool:
    for _, a in _assignments_by_day(roster):
        start, end = a.hours
        if not any(lo <= start and hi >= end for lo, hi in availability.get(a.faculty, [])):
            return False
    return True
