from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from app.core.logging import get_logger

logger = get_logger("graph")

WHITE, GRAY, BLACK = 0, 1, 2


class CourseLike(Protocol):
    id: str
    prerequisites: list[str] | None


class CycleDetected(ValueError):
    """No total order exists because the prerequisites form a cycle."""


@dataclass
class PrereqGraph:
    forward: dict[str, list[str]] = field(default_factory=dict)  # prereq -> dependents
    reverse: dict[str, list[str]] = field(default_factory=dict)  # course -> prereqs


def _prereqs_of(course: CourseLike) -> list[str]:
    return list(course.prerequisites or [])


def build_graph(courses: Iterable[CourseLike]) -> PrereqGraph:
    graph = PrereqGraph()
    for course in courses:
        reqs = _prereqs_of(course)
        graph.forward.setdefault(course.id, [])
        graph.reverse[course.id] = reqs
        for req in reqs:
            graph.forward.setdefault(req, []).append(course.id)
    return graph


def detect_cycle(courses: Sequence[CourseLike]) -> bool:
    """Three-color DFS over the forward view.

    Returns True as soon as an edge into a GRAY node (one still on the
    traversal stack) is found. The stack holds neighbor iterators so the
    visiting order matches the recursive formulation.
    """
    forward = build_graph(courses).forward
    color = {course.id: WHITE for course in courses}

    for course in courses:
        if color[course.id] != WHITE:
            continue
        color[course.id] = GRAY
        stack = [(course.id, iter(forward.get(course.id, [])))]
        while stack:
            node, neighbors = stack[-1]
            for neighbor in neighbors:
                state = color.get(neighbor)
                if state == GRAY:
                    return True
                if state == WHITE:
                    color[neighbor] = GRAY
                    stack.append((neighbor, iter(forward.get(neighbor, []))))
                    break
            else:
                color[node] = BLACK
                stack.pop()
    return False


def topological_sort(courses: Sequence[CourseLike]) -> list[str]:
    forward = build_graph(courses).forward

    # Buckets exist only for course ids; a prerequisite without a record is
    # never dequeued, so its dependents stay blocked.
    indegree = {course.id: 0 for course in courses}
    for course in courses:
        indegree[course.id] += len(_prereqs_of(course))

    queue = deque(course.id for course in courses if indegree[course.id] == 0)
    order: list[str] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for nxt in forward.get(node, []):
            indegree[nxt] -= 1
            if indegree[nxt] == 0:
                queue.append(nxt)

    if len(order) < len(courses):
        logger.debug(
            "Residual cycle: ordered %d of %d courses", len(order), len(courses)
        )
        raise CycleDetected("Cycle detected in prerequisites")

    return order


def ensure_acyclic(
    courses: Sequence[CourseLike],
    message: str = "Circular prerequisite dependency detected",
) -> None:
    if detect_cycle(courses):
        raise CycleDetected(message)


def find_all_prerequisites(course_id: str, courses: Sequence[CourseLike]) -> list[str]:
    """Every course reachable through prerequisite links, in DFS pre-order.

    Unknown ids resolve to an empty list. The visited set makes the walk
    terminate even if the data already contains a cycle.
    """
    reverse = build_graph(courses).reverse
    visited = {course_id}
    found = [course_id]
    stack = [iter(reverse.get(course_id, []))]

    while stack:
        for req in stack[-1]:
            if req not in visited:
                visited.add(req)
                found.append(req)
                stack.append(iter(reverse.get(req, [])))
                break
        else:
            stack.pop()

    return [cid for cid in found if cid != course_id]


def find_shortest_path(
    start_id: str, end_id: str, courses: Sequence[CourseLike]
) -> list[str] | None:
    forward = build_graph(courses).forward
    queue = deque([(start_id, [start_id])])
    visited: set[str] = set()

    while queue:
        node, path = queue.popleft()
        if node == end_id:
            return path
        if node in visited:
            continue
        visited.add(node)
        for nxt in forward.get(node, []):
            if nxt not in visited:
                queue.append((nxt, path + [nxt]))

    return None


def longest_prerequisite_chain(courses: Sequence[CourseLike]) -> int:
    """Length of the deepest prerequisite chain, counted in courses.

    A course with no record or no prerequisites has depth 1. A prerequisite
    that is still on the walk stack contributes 0, which keeps cyclic data
    from looping. Depths reached through such a cut are not cached, since
    they depend on which courses were on the stack at the time.
    """
    reverse = build_graph(courses).reverse
    depth: dict[str, int] = {}
    longest = 0

    for course in courses:
        if course.id in depth:
            longest = max(longest, depth[course.id])
            continue
        on_stack = {course.id}
        # frame: [node, remaining prereqs, deepest prereq so far, cut short]
        stack = [[course.id, iter(reverse.get(course.id, [])), 0, False]]
        result = 0
        while stack:
            frame = stack[-1]
            for req in frame[1]:
                if req in on_stack:
                    frame[3] = True
                elif req in depth:
                    frame[2] = max(frame[2], depth[req])
                else:
                    on_stack.add(req)
                    stack.append([req, iter(reverse.get(req, [])), 0, False])
                    break
            else:
                node, _, deepest, cut = stack.pop()
                on_stack.discard(node)
                result = 1 + deepest
                if not cut:
                    depth[node] = result
                if stack:
                    stack[-1][2] = max(stack[-1][2], result)
                    stack[-1][3] = stack[-1][3] or cut
        longest = max(longest, result)

    return longest
