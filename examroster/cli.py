"""
Command-line entry point.

    examroster --students students.csv --courses courses.csv \\
               --faculty faculty.csv --dates dates.txt --out-dir out/
    examroster --generate 200 --days 5 --start-date 2026-12-01

Exit codes: 0 schedule written, 1 bad arguments or invalid input.
"""

import argparse
import logging
import sys
from datetime import date

from .algorithms.greedy import STRATEGIES
from .config import DEFAULT_CONFIG, ConfigError, load_config
from .graph_build import normalize_course_list
from .io_utils import (
    consecutive_dates, load_courses_csv, load_exam_dates, load_faculty_csv,
    load_students_csv, load_toronto_stu,
)
from .pipeline import build_schedule
from .reporting import save_report
from .scheduling.evaluation import summary
from .scheduling.validation import InvalidInputError
from .synthetic import generate_dataset

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="ExamRoster - exam timetabling and invigilation roster")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument('--students', type=str, help='students CSV (Roll No, Name, Email, courses...)')
    src.add_argument('--stu', type=str, help='Toronto .stu file (one student per line)')
    src.add_argument('--generate', type=int, default=None, help='Generate N synthetic students')
    p.add_argument('--courses', type=str, help='courses CSV (first column "Course"); default: every enrolled course')
    p.add_argument('--faculty', type=str, help='faculty availability CSV (Name, Email, 9am-10am ... 4pm-5pm)')

    # synthetic sizes
    p.add_argument('--n-courses', type=int, default=40)
    p.add_argument('--n-faculty', type=int, default=15)
    p.add_argument('--seed', type=int, default=42)

    # exam days
    p.add_argument('--dates', type=str, help='file with one YYYY-MM-DD exam date per line')
    p.add_argument('--days', type=int, default=None, help='number of consecutive exam days (with --start-date)')
    p.add_argument('--start-date', type=date.fromisoformat, default=None, help='first exam day, YYYY-MM-DD')
    p.add_argument('--slots-per-day', type=int, default=None, help='expected slots per day (informational)')

    p.add_argument('--strategy', choices=STRATEGIES, default='sequential')
    p.add_argument('--config', type=str, help='JSON file overriding scheduler settings')
    p.add_argument('--out-dir', type=str, default=None, help='write timetable/conflicts/invigilation CSVs and JSON here')
    p.add_argument('--log-level', default='WARNING', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return p


def _exam_dates(args):
    if args.dates:
        return load_exam_dates(args.dates)
    if args.days is None:
        raise InvalidInputError("Provide --dates FILE or --days N")
    return consecutive_dates(args.start_date or date.today(), args.days)


def run(args) -> int:
    cfg = load_config(args.config) if args.config else DEFAULT_CONFIG

    availability = {}
    if args.generate is not None:
        enrollment, course_list, availability = generate_dataset(
            args.generate, args.n_courses, args.n_faculty, seed=args.seed, config=cfg
        )
    elif args.students:
        enrollment = load_students_csv(args.students)
        course_list = None
    else:
        enrollment = load_toronto_stu(args.stu)
        course_list = None

    if args.courses:
        course_list = load_courses_csv(args.courses)
    elif course_list is None:
        course_list = normalize_course_list(c for courses in enrollment.values() for c in courses)
    if args.faculty:
        availability = load_faculty_csv(args.faculty)
    logger.info("Loaded %d student(s), %d course(s), %d faculty",
                len(enrollment), len(course_list), len(availability))

    exam_dates = _exam_dates(args)
    report = build_schedule(enrollment, course_list, availability, exam_dates,
                            slots_per_day=args.slots_per_day, config=cfg, strategy=args.strategy)

    print(summary(report.exams.graph, report.exams, report.roster))

    if args.out_dir:
        save_report(args.out_dir, report)
        print(f"Saved: {args.out_dir}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        return run(args)
    except FileNotFoundError as e:
        print(f"[ERROR] File not found: {e.filename}", file=sys.stderr)
    except (ConfigError, InvalidInputError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
    return 1


if __name__ == '__main__':
    sys.exit(main())
