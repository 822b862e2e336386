"""
Text rendering of an ActivityResult.

Functions return strings; printing is left to the caller.
"""

import json
from collections.abc import Sequence
from datetime import date, datetime

from github_activity.services.activity.formatter import format_event
from github_activity.services.activity.stats import StatsSummary
from github_activity.services.github.types import ActivityResult, Event, Profile

HEADER_RULE = "═" * 70
STATS_RULE = "─" * 40
MAX_BAR_WIDTH = 10
NO_ACTIVITY = "No activity found for the given criteria"


def render_header(profile: Profile) -> str:
    lines = [HEADER_RULE, f"{profile.name or profile.login} @{profile.login}"]
    if profile.bio:
        lines.append(profile.bio)

    facts = []
    if profile.location:
        facts.append(f"📍 {profile.location}")
    if profile.followers:
        facts.append(f"👥 {profile.followers} followers")
    if profile.following:
        facts.append(f"📋 {profile.following} following")
    if profile.public_repos:
        facts.append(f"📦 {profile.public_repos} repos")
    if facts:
        lines.append(" | ".join(facts))

    lines.append(HEADER_RULE)
    return "\n".join(lines)


def render_stats(summary: StatsSummary) -> str:
    lines = ["📊 Activity Statistics", STATS_RULE, "Event Types:"]
    for type_name, count in summary.top_event_types():
        bar = "█" * min(count, MAX_BAR_WIDTH)
        lines.append(f"  {type_name:<15} {bar} {count}")

    lines.append("")
    lines.append("Most Active Repos:")
    for repo, count in summary.top_repos():
        lines.append(f"  {repo:<40} {count} events")
    lines.append(STATS_RULE)
    return "\n".join(lines)


def group_by_local_date(events: Sequence[Event]) -> dict[date, list[Event]]:
    """Partition events by local calendar date, keeping first-seen date order."""
    groups: dict[date, list[Event]] = {}
    for event in events:
        groups.setdefault(event.created_at.astimezone().date(), []).append(event)
    return groups


def render_events(
    events: Sequence[Event],
    group_by_date: bool = True,
    now: datetime | None = None,
) -> str:
    if not events:
        return NO_ACTIVITY

    lines: list[str] = []
    if group_by_date:
        for day, day_events in group_by_local_date(events).items():
            if lines:
                lines.append("")
            lines.append(day.strftime("%x"))
            lines.extend(f"  {format_event(event, now)}" for event in day_events)
    else:
        lines.extend(format_event(event, now) for event in events)

    plural = "" if len(events) == 1 else "s"
    lines.append("")
    lines.append(f"Showing {len(events)} event{plural}")
    return "\n".join(lines)


def render_activity(
    result: ActivityResult,
    summary: StatsSummary | None = None,
    group_by_date: bool = True,
    now: datetime | None = None,
) -> str:
    """Header, optional statistics block, then the event list."""
    sections = [render_header(result.profile)]
    if summary is not None:
        sections.append(render_stats(summary))
    sections.append(render_events(result.events, group_by_date=group_by_date, now=now))
    return "\n\n".join(sections)


def render_raw(result: ActivityResult) -> str:
    """The result as pretty JSON, in the shape the API returned it."""
    return json.dumps(result.to_dict(), indent=2)
