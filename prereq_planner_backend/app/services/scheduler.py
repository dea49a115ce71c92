from dataclasses import dataclass


@dataclass
class ScheduleResult:
    terms: list[dict]
    bottlenecks: list[str]


def schedule_terms(
    ordered_courses: list[str],
    prereqs: dict[str, list[str]],
    credits: dict[str, int],
    max_courses: int = 5,
) -> ScheduleResult:
    terms = []
    bottlenecks = []
    completed: set[str] = set()
    queue = list(ordered_courses)

    while queue:
        current = []
        remaining = []
        for course in queue:
            # Only courses finished in an earlier term count as satisfied
            course_prereqs = prereqs.get(course, [])
            if len(current) < max_courses and all(p in completed for p in course_prereqs):
                current.append(course)
            else:
                remaining.append(course)

        if not current:
            forced = remaining.pop(0)
            current.append(forced)
            bottlenecks.append(f"Prerequisites unmet for {forced}; scheduled anyway")

        queue = remaining
        completed.update(current)
        terms.append(
            {
                "term": f"Semester {len(terms) + 1}",
                "courses": current,
                "credits": sum(credits.get(c, 0) for c in current),
            }
        )

    return ScheduleResult(terms=terms, bottlenecks=bottlenecks)
