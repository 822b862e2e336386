"""
One-line descriptions of GitHub events.

Everything here is a pure function of the event and a reference ``now``;
pass ``now`` explicitly to get reproducible output.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import assert_never

from github_activity.services.github.types import (
    CreatePayload,
    Event,
    ForkPayload,
    IssuePayload,
    OtherPayload,
    PullRequestPayload,
    PushPayload,
    ReleasePayload,
    WatchPayload,
)

MINUTE_MS = 60_000
HOUR_MS = 3_600_000
DAY_MS = 86_400_000


@dataclass(frozen=True)
class EventDescription:
    """Icon and text for an event, without the relative time."""

    icon: str
    text: str

    def __str__(self) -> str:
        return f"{self.icon} {self.text}"


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """
    Render how long ago ``timestamp`` was.

    Under an hour -> ``"{m}m ago"``, under a day -> ``"{h}h ago"``,
    under 30 days -> ``"{d}d ago"``, otherwise the locale date.
    """
    now = now or datetime.now(UTC)
    diff_ms = int((now - timestamp).total_seconds() * 1000)

    minutes = diff_ms // MINUTE_MS
    if minutes < 60:
        return f"{minutes}m ago"
    hours = diff_ms // HOUR_MS
    if hours < 24:
        return f"{hours}h ago"
    days = diff_ms // DAY_MS
    if days < 30:
        return f"{days}d ago"
    return timestamp.astimezone().strftime("%x")


def describe_event(event: Event) -> EventDescription:
    """Describe ``event`` according to its payload variant."""
    repo = event.repo_name
    payload = event.payload

    if isinstance(payload, PushPayload):
        word = "commit" if payload.commit_count == 1 else "commits"
        return EventDescription(
            "📚", f"Pushed {payload.commit_count} {word} to {repo} ({payload.branch})"
        )
    elif isinstance(payload, CreatePayload):
        if payload.ref_type == "repository":
            return EventDescription("✨", f"Created repository in {repo}")
        ref = f' "{payload.ref}"' if payload.ref else ""
        return EventDescription("✨", f"Created {payload.ref_type}{ref} in {repo}")
    elif isinstance(payload, IssuePayload):
        icon = "📝" if payload.action == "opened" else "✅"
        return EventDescription(icon, f"{payload.action} issue #{payload.number} in {repo}")
    elif isinstance(payload, PullRequestPayload):
        icon = "🔀" if payload.action == "opened" else "✅"
        return EventDescription(icon, f"{payload.action} PR #{payload.number} in {repo}")
    elif isinstance(payload, WatchPayload):
        return EventDescription("⭐", f"Starred {repo}")
    elif isinstance(payload, ForkPayload):
        return EventDescription("🍴", f"Forked {repo} to {payload.forkee}")
    elif isinstance(payload, ReleasePayload):
        return EventDescription("🚀", f"Released {payload.tag_name} in {repo}")
    elif isinstance(payload, OtherPayload):
        return EventDescription("⚡", f"{payload.type_name} in {repo}")
    else:
        assert_never(payload)


def format_event(event: Event, now: datetime | None = None) -> str:
    """Single display line for ``event``, ending with its relative time."""
    return f"{describe_event(event)} {format_relative_time(event.created_at, now)}"
