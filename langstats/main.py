import logging
from typing import List, Literal, Optional

from fastapi import Depends, FastAPI, Header, Query, Request
from fastapi.responses import PlainTextResponse, Response

from .config import Settings
from .github import GitHubClient, GitHubError, RateLimitExceeded
from .models import HealthResponse, LanguageReport
from .render import MEDIA_TYPES, render
from .rules import DEFAULT_COUNT_WEIGHT, DEFAULT_SIZE_WEIGHT, SVG_CACHE_CONTROL
from .service import InvalidUsername, NoLanguageData, build_report

logger = logging.getLogger(__name__)

USAGE = """Simple Language Stats

Usage: /{username}

Returns a card listing the most used languages:
Language1 X%  Language2 Y%  Language3 Z%
Language4 A%  Language5 B%  Language6 C%

Query parameters:
  format        svg (default), text or html
  size_weight   exponent applied to byte size (default 1)
  count_weight  exponent applied to repository count (default 0)
  exclude       repository name to skip, may be repeated

JSON: /api/languages/{username}

Example: /octocat

Note: For higher rate limits, configure a GitHub token in your environment.
Without a token, you may encounter rate limit errors after several requests."""

app = FastAPI(
    title="simple-lang-stats",
    description="Normalized programming language statistics for GitHub users",
    version="0.1.0",
)


def get_settings() -> Settings:
    return Settings.from_env()


def get_client(
    authorization: Optional[str] = Header(default=None),
    x_github_token: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> GitHubClient:
    # a caller-supplied token (needed for private repositories) wins
    user_token = None
    if authorization:
        user_token = authorization.removeprefix("Bearer ").strip() or None
    return GitHubClient(token=user_token or x_github_token or settings.github_token)


@app.exception_handler(InvalidUsername)
async def invalid_username_handler(request: Request, exc: InvalidUsername):
    return PlainTextResponse(str(exc), status_code=400)


@app.exception_handler(NoLanguageData)
async def no_language_data_handler(request: Request, exc: NoLanguageData):
    return PlainTextResponse(str(exc), status_code=404)


@app.exception_handler(GitHubError)
async def github_error_handler(request: Request, exc: GitHubError):
    logger.warning("GitHub request failed for %s: %s", request.url.path, exc.message)
    headers = {}
    if isinstance(exc, RateLimitExceeded):
        headers["Retry-After"] = str(exc.retry_after)
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=headers)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/", response_class=PlainTextResponse)
def usage():
    return USAGE


@app.get("/api/languages/{username}", response_model=LanguageReport)
def languages(
    username: str,
    size_weight: float = Query(default=DEFAULT_SIZE_WEIGHT, ge=0),
    count_weight: float = Query(default=DEFAULT_COUNT_WEIGHT, ge=0),
    exclude: List[str] = Query(default=[]),
    client: GitHubClient = Depends(get_client),
):
    return build_report(client, username, size_weight, count_weight, exclude)


@app.get("/{username}")
def language_card(
    username: str,
    format: Literal["svg", "text", "html"] = "svg",
    size_weight: float = Query(default=DEFAULT_SIZE_WEIGHT, ge=0),
    count_weight: float = Query(default=DEFAULT_COUNT_WEIGHT, ge=0),
    exclude: List[str] = Query(default=[]),
    client: GitHubClient = Depends(get_client),
):
    report = build_report(client, username, size_weight, count_weight, exclude)

    headers = {}
    if format == "svg":
        headers["Cache-Control"] = SVG_CACHE_CONTROL
    return Response(
        content=render(report, format),
        media_type=MEDIA_TYPES[format],
        headers=headers,
    )
