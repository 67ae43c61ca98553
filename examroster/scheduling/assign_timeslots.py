import logging
from typing import Dict, Iterable, List, Mapping, Optional

from ..algorithms.greedy import color_in_order, order_courses
from ..config import DEFAULT_CONFIG, SchedulerConfig
from ..graph_build import build_conflict_graph, course_list_gaps, normalize_course_list, normalize_enrollment
from ..models import ExamScheduleResult, TimeSlot
from ..timeslots import generate_time_slots, slots_per_day as generated_slots_per_day
from .evaluation import find_student_conflicts
from .validation import InvalidInputError, validate_exam_inputs

logger = logging.getLogger(__name__)


def _preview(ids: List[str], limit: int = 5) -> str:
    shown = ", ".join(ids[:limit])
    return shown if len(ids) <= limit else f"{shown}, ... (+{len(ids) - limit} more)"


def build_timetable(course_list: List[str], course_slots: Mapping[str, int],
                    time_slots: List[TimeSlot]) -> Dict[str, List[str]]:
    """Group courses by slot; keys in slot order, courses in list order."""
    by_index: Dict[int, List[str]] = {}
    for course in course_list:
        by_index.setdefault(course_slots[course], []).append(course)
    return {time_slots[i].label: by_index[i] for i in sorted(by_index)}


def schedule_exams(enrollment: Mapping[str, Iterable[str]], course_list: Iterable[str], days: int,
                   slots_per_day: Optional[int] = None, config: Optional[SchedulerConfig] = None,
                   strategy: str = "sequential") -> ExamScheduleResult:
    """Assign every listed course to an exam slot.

    Courses are colored greedily in ``course_list`` order (or by descending
    conflict degree with ``strategy="largest_first"``). A course with no
    conflict-free slot left is recorded as overflow and placed in slot 0, so
    the call always returns a complete timetable; the resulting clashes show
    up in ``conflicts`` and ``conflict_details``.

    ``slots_per_day`` is informational only; the slot count follows from the
    exam length, break length and day bounds in ``config``.
    """
    cfg = config or DEFAULT_CONFIG
    cfg.validate()
    if enrollment is None:
        enrollment = {}
    if not isinstance(course_list, (str, bytes)):
        course_list = list(course_list)
    days = validate_exam_inputs(enrollment, course_list, days, cfg)

    courses = normalize_course_list(course_list)
    students = normalize_enrollment(enrollment)
    unknown, unenrolled = course_list_gaps(students, courses)
    if unknown:
        logger.warning("%d enrolled course(s) are not in the course list and will not be scheduled: %s",
                       len(unknown), _preview(unknown))
    if unenrolled:
        logger.warning("%d listed course(s) have no enrolled students: %s",
                       len(unenrolled), _preview(unenrolled))

    time_slots = generate_time_slots(days, cfg)
    per_day = generated_slots_per_day(cfg)
    if slots_per_day is not None and slots_per_day != per_day:
        logger.warning("Requested %s slots per day but the exam day fits %s; using %s",
                       slots_per_day, per_day, per_day)
    G = build_conflict_graph(students, courses)
    if not courses:
        return ExamScheduleResult(time_slots=time_slots, unknown_courses=unknown, graph=G)
    if not time_slots:
        raise InvalidInputError(
            f"No exam slot fits between {cfg.day_start}:00 and {cfg.day_end}:00 "
            f"with {cfg.exam_duration_hours}h exams"
        )

    order = order_courses(G, courses, strategy)
    course_slots, overflow = color_in_order(G, order, len(time_slots))
    for course in overflow:
        course_slots[course] = 0
    if overflow:
        logger.warning("%d course(s) had no conflict-free slot among %d and were placed in slot 0: %s",
                       len(overflow), len(time_slots), ", ".join(overflow))

    conflicts, details = find_student_conflicts(students, courses, course_slots)
    timetable = build_timetable(courses, course_slots, time_slots)
    logger.info("Scheduled %d course(s) into %d of %d slot(s); %d conflict(s), %d overflow",
                len(courses), len(timetable), len(time_slots), conflicts, len(overflow))
    return ExamScheduleResult(
        timetable=timetable,
        conflicts=conflicts,
        conflict_details=details,
        overflow=overflow,
        course_slots=course_slots,
        time_slots=time_slots,
        unknown_courses=unknown,
        unenrolled_courses=unenrolled,
        graph=G,
    )
