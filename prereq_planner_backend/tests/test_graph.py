from dataclasses import dataclass, field

import pytest

from app.services.graph import (
    CycleDetected,
    build_graph,
    detect_cycle,
    ensure_acyclic,
    find_all_prerequisites,
    find_shortest_path,
    longest_prerequisite_chain,
    topological_sort,
)


@dataclass
class Node:
    id: str
    prerequisites: list[str] = field(default_factory=list)


def _catalog(rows):
    return [Node(cid, list(reqs)) for cid, reqs in rows]


@pytest.fixture
def chain():
    return _catalog([("CS101", []), ("CS201", ["CS101"]), ("CS301", ["CS201"])])


@pytest.fixture
def diamond():
    return _catalog([("D", ["B", "C"]), ("C", ["A"]), ("B", ["A"]), ("A", [])])


def _long_chain(n):
    return [Node("C0")] + [Node(f"C{i}", [f"C{i - 1}"]) for i in range(1, n)]


class TestBuildGraph:
    def test_forward_and_reverse_views(self):
        graph = build_graph(_catalog([("A", []), ("B", ["A"]), ("C", ["A", "X"])]))
        assert graph.forward == {"A": ["B", "C"], "B": [], "C": [], "X": ["C"]}
        assert graph.reverse == {"A": [], "B": ["A"], "C": ["A", "X"]}

    def test_empty_input(self):
        graph = build_graph([])
        assert graph.forward == {}
        assert graph.reverse == {}

    def test_later_record_wins_in_reverse_view(self):
        graph = build_graph(_catalog([("A", ["X"]), ("A", ["Y"])]))
        assert graph.reverse["A"] == ["Y"]
        assert graph.forward["X"] == ["A"]
        assert graph.forward["Y"] == ["A"]

    def test_none_prerequisites_treated_as_empty(self):
        graph = build_graph([Node("A", None)])
        assert graph.reverse == {"A": []}


class TestDetectCycle:
    def test_chain_is_acyclic(self, chain):
        assert detect_cycle(chain) is False

    def test_redefining_root_creates_cycle(self, chain):
        chain.append(Node("CS101", ["CS301"]))
        assert detect_cycle(chain) is True

    def test_self_loop(self):
        assert detect_cycle([Node("A", ["A"])]) is True

    def test_dangling_prerequisite_is_not_a_cycle(self):
        assert detect_cycle([Node("A", ["GHOST"])]) is False

    def test_idempotent(self, chain):
        chain.append(Node("CS101", ["CS301"]))
        assert detect_cycle(chain) == detect_cycle(chain)

    def test_does_not_mutate_input(self, diamond):
        before = [(n.id, list(n.prerequisites)) for n in diamond]
        detect_cycle(diamond)
        assert [(n.id, n.prerequisites) for n in diamond] == before

    def test_long_chain_does_not_recurse(self):
        assert detect_cycle(_long_chain(10_000)) is False


class TestTopologicalSort:
    def test_chain(self, chain):
        assert topological_sort(chain) == ["CS101", "CS201", "CS301"]

    def test_independent_courses_keep_input_order(self):
        courses = _catalog([("PHYS", []), ("ART", []), ("BIO", [])])
        assert topological_sort(courses) == ["PHYS", "ART", "BIO"]

    def test_diamond_follows_fifo_discovery(self, diamond):
        assert topological_sort(diamond) == ["A", "C", "B", "D"]

    def test_every_prerequisite_precedes_dependent(self):
        courses = _catalog([
            ("ML", ["STATS", "LINALG", "CS201"]),
            ("CS201", ["CS101"]),
            ("STATS", ["CALC"]),
            ("LINALG", ["CALC"]),
            ("CALC", []),
            ("CS101", []),
        ])
        order = topological_sort(courses)
        assert sorted(order) == sorted(c.id for c in courses)
        for course in courses:
            for req in course.prerequisites:
                assert order.index(req) < order.index(course.id)

    def test_cycle_raises(self, chain):
        chain.append(Node("CS101", ["CS301"]))
        assert detect_cycle(chain) is True
        with pytest.raises(CycleDetected):
            topological_sort(chain)

    def test_cycle_error_is_a_value_error(self):
        with pytest.raises(ValueError, match="Cycle detected"):
            topological_sort(_catalog([("A", ["B"]), ("B", ["A"])]))

    def test_unknown_prerequisite_blocks_its_dependents(self):
        # No in-degree bucket exists for GHOST, so B never becomes ready
        with pytest.raises(CycleDetected):
            topological_sort(_catalog([("A", []), ("B", ["GHOST"])]))

    def test_empty(self):
        assert topological_sort([]) == []

    def test_long_chain(self):
        order = topological_sort(_long_chain(10_000))
        assert order[0] == "C0"
        assert order[-1] == "C9999"

    def test_does_not_mutate_input(self, diamond):
        before = [(n.id, list(n.prerequisites)) for n in diamond]
        topological_sort(diamond)
        assert [(n.id, n.prerequisites) for n in diamond] == before


class TestEnsureAcyclic:
    def test_passes_on_acyclic(self, chain):
        ensure_acyclic(chain)

    def test_raises_with_message(self):
        with pytest.raises(CycleDetected, match="would loop"):
            ensure_acyclic([Node("A", ["A"])], "would loop")


class TestFindAllPrerequisites:
    def test_transitive_in_preorder(self):
        courses = _catalog([("X", ["A", "B"]), ("A", ["C"]), ("B", []), ("C", [])])
        assert find_all_prerequisites("X", courses) == ["A", "C", "B"]

    def test_shared_prerequisite_listed_once(self):
        courses = _catalog([("X", ["A", "B"]), ("A", ["C"]), ("B", ["C"]), ("C", [])])
        assert find_all_prerequisites("X", courses) == ["A", "C", "B"]

    def test_unknown_course_resolves_empty(self, chain):
        assert find_all_prerequisites("NOPE", chain) == []

    def test_root_course_has_none(self, chain):
        assert find_all_prerequisites("CS101", chain) == []

    def test_includes_ids_without_records(self):
        assert find_all_prerequisites("A", [Node("A", ["GHOST"])]) == ["GHOST"]

    def test_tolerates_cycles(self):
        courses = _catalog([("A", ["B"]), ("B", ["A"])])
        assert find_all_prerequisites("A", courses) == ["B"]

    def test_long_chain(self):
        found = find_all_prerequisites("C9999", _long_chain(10_000))
        assert len(found) == 9999
        assert found[0] == "C9998"
        assert found[-1] == "C0"

    def test_does_not_mutate_input(self, diamond):
        before = [(n.id, list(n.prerequisites)) for n in diamond]
        find_all_prerequisites("D", diamond)
        assert [(n.id, n.prerequisites) for n in diamond] == before


class TestFindShortestPath:
    def test_same_course(self, chain):
        assert find_shortest_path("CS101", "CS101", chain) == ["CS101"]

    def test_same_unknown_course(self):
        assert find_shortest_path("Z", "Z", []) == ["Z"]

    def test_follows_dependents(self, chain):
        assert find_shortest_path("CS101", "CS301", chain) == ["CS101", "CS201", "CS301"]

    def test_prefers_fewest_edges(self):
        courses = _catalog([("A", []), ("B", ["A"]), ("C", ["B"]), ("D", ["C", "A"])])
        assert find_shortest_path("A", "D", courses) == ["A", "D"]

    def test_tie_goes_to_first_discovered(self):
        courses = _catalog([("A", []), ("B", ["A"]), ("C", ["A"]), ("D", ["B", "C"]), ("E", ["D"])])
        assert find_shortest_path("A", "E", courses) == ["A", "B", "D", "E"]

    def test_no_path_against_edge_direction(self, chain):
        assert find_shortest_path("CS301", "CS101", chain) is None

    def test_unknown_start(self, chain):
        assert find_shortest_path("NOPE", "CS301", chain) is None

    def test_does_not_mutate_input(self, diamond):
        before = [(n.id, list(n.prerequisites)) for n in diamond]
        find_shortest_path("A", "D", diamond)
        assert [(n.id, n.prerequisites) for n in diamond] == before


class TestLongestPrerequisiteChain:
    def test_empty(self):
        assert longest_prerequisite_chain([]) == 0

    def test_independent(self):
        assert longest_prerequisite_chain(_catalog([("A", []), ("B", [])])) == 1

    def test_chain(self, chain):
        assert longest_prerequisite_chain(chain) == 3

    def test_missing_record_counts_as_one(self):
        assert longest_prerequisite_chain([Node("A", ["GHOST"])]) == 2

    def test_terminates_on_cycle(self):
        assert longest_prerequisite_chain(_catalog([("A", ["B"]), ("B", ["A"])])) == 2

    def test_long_chain(self):
        assert longest_prerequisite_chain(_long_chain(10_000)) == 10_000

    def test_cycle_cut_does_not_leak_between_courses(self):
        # D -> B -> A -> B: B counts A, and A's walk back into B stops
        courses = _catalog([("A", ["B"]), ("B", ["A"]), ("D", ["B"])])
        assert longest_prerequisite_chain(courses) == 3
