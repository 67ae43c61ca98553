from typing import Dict, Iterable, List, Mapping, Tuple
import networkx as nx


def normalize_course_list(courses: Iterable[str]) -> List[str]:
    """Strip ids, drop blanks and repeats; first occurrence keeps its place."""
    seen = set()
    out: List[str] = []
    for c in courses:
        c = str(c).strip()
        if c and c not in seen:
            seen.add(c)
            out.append(c)
    return out


def normalize_enrollment(enrollment: Mapping[str, Iterable[str]]) -> Dict[str, List[str]]:
    return {str(sid): normalize_course_list(courses) for sid, courses in enrollment.items()}


def courses_in_list(courses: Iterable[str], course_set) -> List[str]:
    return [c for c in courses if c in course_set]


def course_list_gaps(enrollment: Mapping[str, List[str]], course_list: List[str]) -> Tuple[List[str], List[str]]:
    """(enrolled courses missing from the list, listed courses nobody takes), in first-seen order."""
    course_set = set(course_list)
    enrolled: Dict[str, None] = {}
    for exams in enrollment.values():
        for c in exams:
            enrolled.setdefault(c, None)
    unknown = [c for c in enrolled if c not in course_set]
    unenrolled = [c for c in course_list if c not in enrolled]
    return unknown, unenrolled


def build_conflict_graph(enrollment: Mapping[str, List[str]], course_list: List[str]) -> nx.Graph:
    """Conflict graph over ``course_list``; enrollments outside it are ignored."""
    G = nx.Graph()
    G.add_nodes_from(course_list)
    course_set = set(course_list)
    for exams in enrollment.values():
        exams = courses_in_list(exams, course_set)
        for i in range(len(exams)):
            for j in range(i + 1, len(exams)):
                u, v = exams[i], exams[j]
                if u != v:
                    G.add_edge(u, v)
    return G
