"""
Synthetic exam-season data: students with Zipf-skewed course choices and
faculty with random blocks of free hours. Used by the CLI's --generate mode.
"""

import random
from typing import Dict, List, Tuple

import numpy as np
from faker import Faker

from .config import DEFAULT_CONFIG, SchedulerConfig
from .scheduling.validation import merge_intervals

SEED_DEFAULT = 42

DEPARTMENTS = ["CS", "IT", "MATH", "PHYS", "CHEM", "BIO", "ECON", "FIN", "EE", "ME"]


def generate_dataset(
    n_students: int,
    n_courses: int,
    n_faculty: int,
    min_courses_per_student: int = 3,
    max_courses_per_student: int = 6,
    seed: int = SEED_DEFAULT,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Tuple[Dict[str, List[str]], List[str], Dict[str, List[Tuple[int, int]]]]:
    """Return (enrollment, course_list, faculty_availability)."""
    if n_courses < 1:
        raise ValueError("n_courses must be >= 1")
    if not 1 <= min_courses_per_student <= max_courses_per_student:
        raise ValueError("need 1 <= min_courses_per_student <= max_courses_per_student")
    rnd = random.Random(seed)
    np_rng = np.random.default_rng(seed)
    fake = Faker()
    fake.seed_instance(seed)

    course_list: List[str] = []
    while len(course_list) < n_courses:
        dept = rnd.choice(DEPARTMENTS)
        cid = f"{dept}{100 + rnd.randrange(1, 400 + n_courses)}"
        if cid not in course_list:
            course_list.append(cid)

    # a few very popular courses, a long tail of small ones
    popularity = np_rng.zipf(a=1.4, size=n_courses).astype(float)
    popularity = popularity / popularity.sum()

    enrollment: Dict[str, List[str]] = {}
    upper = min(max_courses_per_student, n_courses)
    lower = min(min_courses_per_student, upper)
    for i in range(1, n_students + 1):
        k = rnd.randint(lower, upper)
        chosen = np_rng.choice(course_list, size=k, replace=False, p=popularity)
        enrollment[f"S{i:05d}"] = [str(c) for c in chosen]

    availability: Dict[str, List[Tuple[int, int]]] = {}
    hours = list(range(int(config.day_start), int(config.day_end)))
    for _ in range(n_faculty):
        name = fake.unique.name()
        free = [(h, h + 1) for h in hours if rnd.random() < 0.6]
        availability[name] = merge_intervals(free)
    return enrollment, course_list, availability
