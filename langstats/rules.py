"""
Fixed rules shared by every delivery surface.

This file exists to keep markers, endpoints and defaults in one place.
"""

START_MARKER = "<!-- simple-lang-stats -->"
END_MARKER = "<!-- /simple-lang-stats -->"

GITHUB_API_URL = "https://api.github.com"
GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "simple-lang-stats"
PROJECT_URL = "https://github.com/carolyn-sun/simple-lang-stats"

REPOS_PER_PAGE = 100
LANGUAGES_PER_REPO = 10

# ranking_index = (byte_count ^ size_weight) * (repo_count ^ count_weight)
DEFAULT_SIZE_WEIGHT = 1.0
DEFAULT_COUNT_WEIGHT = 0.0

USERNAME_PATTERN = r"^[a-zA-Z0-9]([a-zA-Z0-9-])*[a-zA-Z0-9]$|^[a-zA-Z0-9]$"

RATE_LIMIT_RETRY_AFTER = 3600  # seconds
SVG_CACHE_CONTROL = "public, max-age=3600"
