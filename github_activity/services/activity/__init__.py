"""
Activity pipeline: fetch, summarize and render a user's GitHub activity.

Module structure:
- fetcher.py: ActivityFetcher (cache + concurrent API calls + filtering)
- formatter.py: Per-event one-line descriptions and relative times
- stats.py: Event kind and repository counts
- renderer.py: Final text or JSON output
"""

from github_activity.services.activity.fetcher import (
    ActivityFetcher,
    FetchOptions,
    build_cache_key,
    parse_since,
)
from github_activity.services.activity.formatter import (
    EventDescription,
    describe_event,
    format_event,
    format_relative_time,
)
from github_activity.services.activity.renderer import (
    render_activity,
    render_events,
    render_header,
    render_raw,
    render_stats,
)
from github_activity.services.activity.stats import StatsSummary, summarize

__all__ = [
    "ActivityFetcher",
    "FetchOptions",
    "build_cache_key",
    "parse_since",
    "EventDescription",
    "describe_event",
    "format_event",
    "format_relative_time",
    "StatsSummary",
    "summarize",
    "render_activity",
    "render_events",
    "render_header",
    "render_raw",
    "render_stats",
]
