"""Module holding constants used across ghtree."""

API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github+json"
USER_AGENT = "ghtree/0.1 (+https://github.com/ghtree)"
DEFAULT_DEST = "."
HTTP_TIMEOUT_SEC = 30
# single page only; see DESIGN.md on pagination
REPOS_PER_PAGE = 100

# steps each repository contributes to the progress bar: clone + fork lineage
STEPS_PER_REPO = 2

# git diagnostics that mean "nothing to do" rather than failure
CLONE_EXISTS_MARKER = "already exists and is not an empty directory"
REMOTE_EXISTS_MARKER = "remote {name} already exists"

UPSTREAM_REMOTE = "upstream"
ORIGINAL_REMOTE = "original"
