from typing import Dict, List, Mapping, Optional, Tuple
import networkx as nx

from ..graph_build import courses_in_list
from ..models import ConflictDetail, ExamScheduleResult, ExamSlotRoster
from .validation import conflicts_ok


def find_student_conflicts(enrollment: Mapping[str, List[str]], course_list: List[str],
                           course_slots: Mapping[str, int]) -> Tuple[int, List[ConflictDetail]]:
    """Count same-slot exams per student, independently of how slots were chosen.

    Every slot holding k >= 2 of a student's exams yields one ConflictDetail
    and adds k - 1 to the total.
    """
    course_set = set(course_list)
    conflicts = 0
    details: List[ConflictDetail] = []
    for student, courses in enrollment.items():
        by_slot: Dict[int, List[str]] = {}
        for course in courses_in_list(courses, course_set):
            if course in course_slots:
                by_slot.setdefault(course_slots[course], []).append(course)
        for slot, assigned in by_slot.items():
            if len(assigned) > 1:
                conflicts += len(assigned) - 1
                details.append(ConflictDetail(student=student, slot=slot, courses=assigned))
    return conflicts, details


def _greedy_clique_lb(G: nx.Graph) -> int:
    """Fast lower bound on chromatic number via a greedy maximal clique.

    Picks the highest-degree node, then greedily grows a clique by repeatedly
    adding a node that is adjacent to all current clique members. This is a
    heuristic lower bound (size of a found clique), O(m) per step.
    """
    if G.number_of_nodes() == 0:
        return 0
    seed = max(G.nodes(), key=lambda u: G.degree(u))
    clique = {seed}
    candidates = set(G.neighbors(seed))
    while candidates:
        u = max(candidates, key=lambda v: G.degree(v))
        new_cands = {v for v in candidates if all(G.has_edge(v, w) for w in clique)}
        if u in new_cands:
            clique.add(u)
            candidates = new_cands.intersection(G.neighbors(u))
        else:
            candidates.remove(u)
    return len(clique)


def summary(G: nx.Graph, result: ExamScheduleResult,
            roster: Optional[Mapping[str, ExamSlotRoster]] = None) -> str:
    n = G.number_of_nodes()
    m = G.number_of_edges()
    total_slots = len(result.time_slots)
    slots_used = len(result.timetable)
    lb = _greedy_clique_lb(G)
    warning = ""
    if n and total_slots < lb:
        warning = (
            f"Warning: slots={total_slots} < clique LB={lb}; zero-conflict timetable is impossible.\n"
        )
    text = (
        f"Courses: {n}  Conflict edges: {m}\n"
        f"Slots available: {total_slots}  Used: {slots_used}\n"
        f"Clique lower bound: {lb}\n"
        f"Overflow courses: {result.overflow_count}  Student conflicts: {result.conflicts}\n"
        f"Valid (conflicts): {conflicts_ok(G, result.course_slots)}\n"
        f"{warning}"
    )
    if roster is not None:
        subslots = sum(len(entry.assignments) for entry in roster.values())
        uncovered = sum(len(entry.uncovered) for entry in roster.values())
        text += f"Invigilation sub-slots: {subslots}  Covered: {subslots - uncovered}  Uncovered: {uncovered}\n"
    return text
