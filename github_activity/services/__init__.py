"""Service layer: GitHub API access and the activity pipeline."""
