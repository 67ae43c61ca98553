import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from ..config import DEFAULT_CONFIG, SchedulerConfig
from ..models import ExamSlotRoster, FacultyAssignment, TimeSlot
from ..timeslots import hourly_subslots, invigilation_window, parse_slot_label, subslot_label
from .validation import InvalidInputError, normalize_availability

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


@dataclass
class _RosterState:
    # "Day N" -> faculty -> assignments made that day
    used_on_day: Dict[str, Counter] = field(default_factory=lambda: defaultdict(Counter))
    # ("Day N", "9:00-10:00") -> faculty already invigilating that hour
    used_in_subslot: Dict[Tuple[str, str], Set[str]] = field(default_factory=lambda: defaultdict(set))


def _date_str(d: Optional[DateLike]) -> Optional[str]:
    if d is None:
        return None
    if isinstance(d, date):
        return d.isoformat()
    return str(d)


def is_available(intervals: List[Tuple[int, int]], start: int, end: int) -> bool:
    return any(lo <= start and hi >= end for lo, hi in intervals)


def _candidates(availability: Mapping[str, List[Tuple[int, int]]], state: _RosterState,
                day_key: str, sub_key: str, start: int, end: int, cap: int) -> List[str]:
    used_today = state.used_on_day[day_key]
    used_here = state.used_in_subslot[(day_key, sub_key)]
    return [
        faculty for faculty, intervals in availability.items()
        if is_available(intervals, start, end)
        and used_today[faculty] < cap
        and faculty not in used_here
    ]


def assign_slot(slot: TimeSlot, availability: Mapping[str, List[Tuple[int, int]]],
                state: _RosterState, config: SchedulerConfig) -> Dict[str, List[FacultyAssignment]]:
    assignments: Dict[str, List[FacultyAssignment]] = {}
    day_key = slot.day_key
    window_start, window_end = invigilation_window(slot, config)
    for start, end in hourly_subslots(window_start, window_end):
        sub_key = subslot_label(start, end)
        found = _candidates(availability, state, day_key, sub_key, start, end,
                            config.max_assignments_per_day)
        if found:
            faculty = found[0]
            assignments[sub_key] = [FacultyAssignment(faculty=faculty, hours=(start, end))]
            state.used_on_day[day_key][faculty] += 1
            state.used_in_subslot[(day_key, sub_key)].add(faculty)
        else:
            logger.debug("No invigilator for %s %s", slot.label, sub_key)
            assignments[sub_key] = []
    return assignments


def schedule_faculties(timetable: Mapping[str, Sequence[str]],
                       faculty_availability: Mapping[str, Sequence[Sequence[int]]],
                       exam_dates: Sequence[DateLike],
                       config: Optional[SchedulerConfig] = None) -> Dict[str, ExamSlotRoster]:
    """Build the invigilation roster for ``timetable``.

    ``exam_dates[n - 1]`` is the calendar date of "Day n"; it only labels the
    roster. Slots are processed in the timetable's iteration order, which
    decides who gets the earlier sub-slots when faculty are scarce.
    """
    cfg = config or DEFAULT_CONFIG
    cfg.validate()
    availability = normalize_availability(faculty_availability, cfg)
    exam_dates = list(exam_dates or [])

    slots: List[Tuple[str, TimeSlot]] = []
    for label in timetable:
        slot = parse_slot_label(label)
        if slot is None:
            raise InvalidInputError(f"Unrecognised exam slot label: {label!r}")
        slots.append((label, slot))

    state = _RosterState()
    roster: Dict[str, ExamSlotRoster] = {}
    missing_days = set()
    for label, slot in slots:
        if slot.day <= len(exam_dates):
            slot_date = _date_str(exam_dates[slot.day - 1])
        else:
            slot_date = None
            missing_days.add(slot.day)
        roster[label] = ExamSlotRoster(
            courses=list(timetable[label]),
            date=slot_date,
            assignments=assign_slot(slot, availability, state, cfg),
        )
    if missing_days:
        logger.warning("No exam date given for day(s) %s; roster dates left empty",
                       ", ".join(str(d) for d in sorted(missing_days)))

    uncovered = sum(len(entry.uncovered) for entry in roster.values())
    logger.info("Rostered %d exam slot(s) with %d faculty; %d sub-slot(s) uncovered",
                len(roster), len(availability), uncovered)
    return roster
