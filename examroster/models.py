from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import networkx as nx


def format_hour(hour: float) -> str:
    """Render an hour the way slot labels show it: 9 -> '9', 12.5 -> '12.5'."""
    if float(hour).is_integer():
        return str(int(hour))
    return repr(float(hour))


def hour_range_label(start: float, end: float) -> str:
    return f"{format_hour(start)}:00-{format_hour(end)}:00"


@dataclass(frozen=True)
class TimeSlot:
    day: int      # 1-based
    slot: int     # 1-based within the day
    start: float  # hour of day
    end: float

    @property
    def label(self) -> str:
        return f"Day {self.day}, Slot {self.slot} ({hour_range_label(self.start, self.end)})"

    @property
    def day_key(self) -> str:
        return f"Day {self.day}"


@dataclass
class ConflictDetail:
    student: str
    slot: int  # 0-based index into the generated slot sequence
    courses: List[str] = field(default_factory=list)


@dataclass
class ExamScheduleResult:
    # slot label -> courses, chronological
    timetable: Dict[str, List[str]] = field(default_factory=dict)
    conflicts: int = 0
    conflict_details: List[ConflictDetail] = field(default_factory=list)
    # courses with no conflict-free slot, forced into slot 0
    overflow: List[str] = field(default_factory=list)
    course_slots: Dict[str, int] = field(default_factory=dict)
    time_slots: List[TimeSlot] = field(default_factory=list)
    # enrolled but missing from the course list; never scheduled
    unknown_courses: List[str] = field(default_factory=list)
    # listed but taken by no student
    unenrolled_courses: List[str] = field(default_factory=list)
    graph: Optional[nx.Graph] = field(default=None, repr=False, compare=False)

    @property
    def overflow_count(self) -> int:
        return len(self.overflow)

    @property
    def is_conflict_free(self) -> bool:
        return self.conflicts == 0 and not self.overflow

    def to_dict(self) -> dict:
        return {
            "timetable": {label: list(courses) for label, courses in self.timetable.items()},
            "conflicts": self.conflicts,
            "conflictDetails": [
                {"student": d.student, "slot": d.slot, "conflictingCourses": list(d.courses)}
                for d in self.conflict_details
            ],
            "overflow": list(self.overflow),
            "unknownCourses": list(self.unknown_courses),
            "unenrolledCourses": list(self.unenrolled_courses),
        }


@dataclass
class FacultyAssignment:
    faculty: str
    hours: Tuple[int, int]

    @property
    def time_range(self) -> List[int]:
        return [self.hours[0], self.hours[1]]


@dataclass
class ExamSlotRoster:
    courses: List[str] = field(default_factory=list)
    date: Optional[str] = None
    # sub-slot label ("9:00-10:00") -> assigned faculty
    assignments: Dict[str, List[FacultyAssignment]] = field(default_factory=dict)

    @property
    def uncovered(self) -> List[str]:
        return [sub for sub, assigned in self.assignments.items() if not assigned]


@dataclass
class ScheduleReport:
    exams: ExamScheduleResult
    roster: Dict[str, ExamSlotRoster] = field(default_factory=dict)

    @property
    def assigned_subslots(self) -> int:
        return sum(len(r.assignments) - len(r.uncovered) for r in self.roster.values())

    @property
    def uncovered_subslots(self) -> int:
        return sum(len(r.uncovered) for r in self.roster.values())


def roster_to_dict(roster: Dict[str, ExamSlotRoster]) -> dict:
    out = {}
    for label, entry in roster.items():
        out[label] = {
            "courses": list(entry.courses),
            "date": entry.date,
            "facultyAssignments": {
                sub: [{"faculty": a.faculty, "timeRange": a.time_range} for a in assigned]
                for sub, assigned in entry.assignments.items()
            },
        }
    return out
