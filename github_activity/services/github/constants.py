"""Constants for GitHub service."""

# Versioned JSON media type for the REST API
ACCEPT_HEADER = "application/vnd.github.v3+json"

# GitHub caps per_page at 100 for the events endpoint
MAX_EVENTS_PER_PAGE = 100

# Below this many remaining requests the CLI warns before fetching
RATE_LIMIT_WARNING_THRESHOLD = 5

# Maps the API "type" field to the short kind name used for display
EVENT_TYPE_NAMES: dict[str, str] = {
    "PushEvent": "Push",
    "CreateEvent": "Create",
    "IssuesEvent": "Issues",
    "PullRequestEvent": "PullRequest",
    "WatchEvent": "Watch",
    "ForkEvent": "Fork",
    "ReleaseEvent": "Release",
}

BRANCH_REF_PREFIX = "refs/heads/"
