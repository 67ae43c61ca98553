import csv
import io
import logging
import os
from datetime import date, timedelta
from typing import Dict, IO, List, Tuple, Union

from .scheduling.validation import InvalidInputError, merge_intervals

logger = logging.getLogger(__name__)

TextOrPath = Union[str, os.PathLike, IO]

# availability sheet column headers -> hour interval
FACULTY_HOUR_COLUMNS: Dict[str, Tuple[int, int]] = {
    '9am-10am': (9, 10),
    '10am-11am': (10, 11),
    '11am-12pm': (11, 12),
    '12pm-1pm': (12, 13),
    '1pm-2pm': (13, 14),
    '2pm-3pm': (14, 15),
    '3pm-4pm': (15, 16),
    '4pm-5pm': (16, 17),
}


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='', encoding='utf-8-sig')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8-sig', newline='')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek'):
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _rows(src: TextOrPath) -> List[List[str]]:
    f, should_close = _open_text(src)
    try:
        return [[cell.strip() for cell in row] for row in csv.reader(f) if any(c.strip() for c in row)]
    finally:
        if should_close:
            f.close()


def load_students_csv(src: TextOrPath) -> Dict[str, List[str]]:
    """Roll No, Name, Email, then one course per remaining column."""
    rows = _rows(src)
    if not rows:
        raise InvalidInputError("Students file is empty")
    header = [h.lower().replace(' ', '') for h in rows[0]]
    if len(header) < 3 or 'rollno' not in header[0] or 'name' not in header[1] or 'email' not in header[2]:
        raise InvalidInputError("Invalid students file: missing required columns (Roll No, Name, Email)")
    enrollment: Dict[str, List[str]] = {}
    for i, row in enumerate(rows[1:], start=2):
        if len(row) < 3 or not all(row[:3]):
            logger.warning("Skipping students row %d: missing roll number, name or email", i)
            continue
        enrollment[row[0]] = [c for c in row[3:] if c]
    if not enrollment:
        raise InvalidInputError("No valid student data found in the students file")
    return enrollment


def load_courses_csv(src: TextOrPath) -> List[str]:
    rows = _rows(src)
    if not rows or 'course' not in rows[0][0].lower():
        raise InvalidInputError("Invalid courses file: missing required column (Course)")
    courses: List[str] = []
    for row in rows[1:]:
        if row and row[0] and row[0] not in courses:
            courses.append(row[0])
    if not courses:
        raise InvalidInputError("No valid course data found in the courses file")
    return courses


def load_faculty_csv(src: TextOrPath) -> Dict[str, List[Tuple[int, int]]]:
    """Name, Email, then yes/no per hour column ('9am-10am' ... '4pm-5pm').

    Consecutive available hours are merged into one interval. Faculty with no
    available hour are left out.
    """
    rows = _rows(src)
    if not rows:
        raise InvalidInputError("Faculty file is empty")
    header = [h.lower() for h in rows[0]]
    availability: Dict[str, List[Tuple[int, int]]] = {}
    for row in rows[1:]:
        if len(row) < 2 or not row[0] or not row[1]:
            continue
        hours = [
            FACULTY_HOUR_COLUMNS[header[j]]
            for j in range(2, min(len(row), len(header)))
            if header[j] in FACULTY_HOUR_COLUMNS and row[j].lower() == 'yes'
        ]
        if hours:
            availability[row[0]] = merge_intervals(hours)
    return availability


def load_toronto_stu(src: TextOrPath) -> Dict[str, List[str]]:
    """One student per line, course ids separated by whitespace."""
    students: Dict[str, List[str]] = {}
    f, should_close = _open_text(src)
    try:
        idx = 0
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            sid = f"stu_{idx}"
            idx += 1
            students[sid] = line.replace('\t', ' ').split()
    finally:
        if should_close:
            f.close()
    return students


def load_exam_dates(src: TextOrPath) -> List[date]:
    """One ISO date (YYYY-MM-DD) per line, in exam-day order."""
    dates: List[date] = []
    f, should_close = _open_text(src)
    try:
        for n, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            try:
                dates.append(date.fromisoformat(line))
            except ValueError:
                raise InvalidInputError(f"Line {n}: {line!r} is not a YYYY-MM-DD date") from None
    finally:
        if should_close:
            f.close()
    return dates


def consecutive_dates(start: date, days: int) -> List[date]:
    return [start + timedelta(days=i) for i in range(days)]
