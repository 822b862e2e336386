"""Activity statistics over a list of events."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from github_activity.services.github.types import Event

TOP_REPOS = 5


@dataclass
class StatsSummary:
    """
    Event counts per type name and per repository, in first-seen order.

    Type names are ``Event.type_name`` values, so API types without a
    dedicated kind (``IssueComment``, ``Delete``, ...) keep their own row.
    """

    event_type_counts: dict[str, int] = field(default_factory=dict)
    repo_counts: dict[str, int] = field(default_factory=dict)

    def top_event_types(self) -> list[tuple[str, int]]:
        # Counter.most_common keeps first-seen order for equal counts
        return Counter(self.event_type_counts).most_common()

    def top_repos(self, n: int = TOP_REPOS) -> list[tuple[str, int]]:
        return Counter(self.repo_counts).most_common(n)


def summarize(events: Iterable[Event]) -> StatsSummary:
    types: Counter[str] = Counter()
    repos: Counter[str] = Counter()
    for event in events:
        types[event.type_name] += 1
        repos[event.repo_name] += 1
    return StatsSummary(event_type_counts=dict(types), repo_counts=dict(repos))
