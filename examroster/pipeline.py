from typing import Iterable, Mapping, Optional, Sequence

from .config import SchedulerConfig
from .models import ScheduleReport
from .scheduling.assign_timeslots import schedule_exams
from .scheduling.faculty_assignment import DateLike, schedule_faculties


def build_schedule(enrollment: Mapping[str, Iterable[str]], course_list: Iterable[str],
                   faculty_availability: Mapping[str, Sequence[Sequence[int]]],
                   exam_dates: Sequence[DateLike], slots_per_day: Optional[int] = None,
                   config: Optional[SchedulerConfig] = None,
                   strategy: str = "sequential") -> ScheduleReport:
    """Timetable the exams over ``len(exam_dates)`` days, then roster invigilators."""
    exam_dates = list(exam_dates)
    exams = schedule_exams(enrollment, course_list, len(exam_dates),
                           slots_per_day=slots_per_day, config=config, strategy=strategy)
    roster = schedule_faculties(exams.timetable, faculty_availability, exam_dates, config=config)
    return ScheduleReport(exams=exams, roster=roster)
