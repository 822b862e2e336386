"""Data types for GitHub API responses."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from github_activity.services.github.constants import BRANCH_REF_PREFIX, EVENT_TYPE_NAMES


class EventKind(str, Enum):
    """Event kinds the formatter knows how to describe."""

    PUSH = "Push"
    CREATE = "Create"
    ISSUES = "Issues"
    PULL_REQUEST = "PullRequest"
    WATCH = "Watch"
    FORK = "Fork"
    RELEASE = "Release"
    OTHER = "Other"

    @classmethod
    def from_api_type(cls, event_type: str) -> "EventKind":
        name = EVENT_TYPE_NAMES.get(event_type)
        return cls(name) if name else cls.OTHER


@dataclass(frozen=True)
class PushPayload:
    commit_count: int
    branch: str


@dataclass(frozen=True)
class CreatePayload:
    ref_type: str
    ref: str | None


@dataclass(frozen=True)
class IssuePayload:
    action: str
    number: int | None


@dataclass(frozen=True)
class PullRequestPayload:
    action: str
    number: int | None


@dataclass(frozen=True)
class WatchPayload:
    pass


@dataclass(frozen=True)
class ForkPayload:
    forkee: str


@dataclass(frozen=True)
class ReleasePayload:
    tag_name: str


@dataclass(frozen=True)
class OtherPayload:
    type_name: str  # API type with the "Event" suffix removed


EventPayload = (
    PushPayload
    | CreatePayload
    | IssuePayload
    | PullRequestPayload
    | WatchPayload
    | ForkPayload
    | ReleasePayload
    | OtherPayload
)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_payload(kind: EventKind, event_type: str, payload: dict[str, Any]) -> EventPayload:
    """Pull the kind-specific fields out of the raw payload."""
    if kind is EventKind.PUSH:
        commits = payload.get("commits")
        if isinstance(commits, list):
            commit_count = len(commits)
        else:
            # Newer event payloads drop the commit list but keep the size
            commit_count = int(payload.get("size") or 0)
        branch = str(payload.get("ref") or "").removeprefix(BRANCH_REF_PREFIX)
        return PushPayload(commit_count=commit_count, branch=branch)
    if kind is EventKind.CREATE:
        return CreatePayload(ref_type=str(payload.get("ref_type") or ""), ref=payload.get("ref"))
    if kind is EventKind.ISSUES:
        issue = payload.get("issue") or {}
        return IssuePayload(action=str(payload.get("action") or ""), number=issue.get("number"))
    if kind is EventKind.PULL_REQUEST:
        pr = payload.get("pull_request") or {}
        return PullRequestPayload(
            action=str(payload.get("action") or ""),
            number=pr.get("number") or payload.get("number"),
        )
    if kind is EventKind.WATCH:
        return WatchPayload()
    if kind is EventKind.FORK:
        forkee = payload.get("forkee") or {}
        return ForkPayload(forkee=str(forkee.get("full_name") or ""))
    if kind is EventKind.RELEASE:
        release = payload.get("release") or {}
        return ReleasePayload(tag_name=str(release.get("tag_name") or ""))
    return OtherPayload(type_name=event_type.removesuffix("Event"))


@dataclass(frozen=True)
class Profile:
    """Normalized GitHub user profile."""

    login: str
    name: str | None
    bio: str | None
    location: str | None
    followers: int | None
    following: int | None
    public_repos: int | None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Any) -> "Profile":
        """Build a Profile from a ``/users/{username}`` response."""
        if not isinstance(data, dict) or not data.get("login"):
            raise ValueError("User payload is missing 'login'")
        return cls(
            login=data["login"],
            name=data.get("name"),
            bio=data.get("bio"),
            location=data.get("location"),
            followers=data.get("followers"),
            following=data.get("following"),
            public_repos=data.get("public_repos"),
            raw=data,
        )


@dataclass(frozen=True)
class Event:
    """One entry of a user's public event feed."""

    kind: EventKind
    created_at: datetime
    repo_name: str
    payload: EventPayload
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def type_name(self) -> str:
        """Display name of the kind, e.g. ``Push`` or ``Member`` for unknown kinds."""
        if isinstance(self.payload, OtherPayload):
            return self.payload.type_name
        return self.kind.value

    @classmethod
    def from_api(cls, data: Any) -> "Event":
        """Build an Event from one element of ``/users/{username}/events``."""
        if not isinstance(data, dict):
            raise ValueError("Event payload is not an object")
        event_type = str(data.get("type") or "UnknownEvent")
        created_at = data.get("created_at")
        if not isinstance(created_at, str):
            raise ValueError("Event payload is missing 'created_at'")
        kind = EventKind.from_api_type(event_type)
        repo = data.get("repo") or {}
        return cls(
            kind=kind,
            created_at=_parse_timestamp(created_at),
            repo_name=str(repo.get("name") or "<unknown>"),
            payload=_parse_payload(kind, event_type, data.get("payload") or {}),
            raw=data,
        )


@dataclass
class ActivityResult:
    """Profile plus its (filtered, limited) events; the unit that gets cached."""

    profile: Profile
    events: list[Event]
    from_cache: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.profile.raw,
            "events": [event.raw for event in self.events],
        }

    @classmethod
    def from_dict(cls, data: Any, *, from_cache: bool = False) -> "ActivityResult":
        if not isinstance(data, dict) or not isinstance(data.get("events"), list):
            raise ValueError("Activity payload must have 'user' and 'events'")
        return cls(
            profile=Profile.from_api(data.get("user")),
            events=[Event.from_api(item) for item in data["events"]],
            from_cache=from_cache,
        )


@dataclass
class RateLimitStatus:
    """Core rate limit bucket as reported by ``/rate_limit``."""

    limit: int
    remaining: int
    reset: int  # Unix timestamp

    @property
    def reset_at(self) -> datetime:
        return datetime.fromtimestamp(self.reset, tz=UTC)
