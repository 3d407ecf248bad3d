"""
GitHub language source.

Fetches the user profile over REST and per-repository language sizes over
GraphQL, and folds them into per-language totals.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from .models import GitHubUser, LanguageTotal, LanguageTotals
from .rules import (
    GITHUB_API_URL,
    GITHUB_GRAPHQL_URL,
    LANGUAGES_PER_REPO,
    RATE_LIMIT_RETRY_AFTER,
    REPOS_PER_PAGE,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

LANGUAGES_QUERY = """
query userInfo($login: String!, $first: Int!, $languages: Int!, $after: String) {
  user(login: $login) {
    repositories(ownerAffiliations: OWNER, isFork: false, first: $first, after: $after) {
      pageInfo {
        hasNextPage
        endCursor
      }
      nodes {
        name
        languages(first: $languages, orderBy: {field: SIZE, direction: DESC}) {
          edges {
            size
            node {
              color
              name
            }
          }
        }
      }
    }
  }
}
"""


class GitHubError(Exception):
    status_code = 502

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserNotFound(GitHubError):
    status_code = 404


class RateLimitExceeded(GitHubError):
    status_code = 429
    retry_after = RATE_LIMIT_RETRY_AFTER


class AuthenticationFailed(GitHubError):
    status_code = 401


class GitHubAPIError(GitHubError):
    status_code = 502


def raise_for_status(resp: requests.Response, not_found: str) -> None:
    """Map an upstream HTTP status onto the GitHubError hierarchy."""
    if resp.ok:
        return
    if resp.status_code == 404:
        raise UserNotFound(not_found)
    if resp.status_code == 403:
        raise RateLimitExceeded(
            "GitHub API rate limit exceeded. Please try again later or provide "
            "a GitHub token for higher rate limits."
        )
    if resp.status_code == 401:
        raise AuthenticationFailed(
            "GitHub API authentication failed. Please check your GitHub token."
        )
    raise GitHubAPIError(f"GitHub API error: {resp.status_code} {resp.reason}")


def collect_totals(
    repos: Iterable[Dict[str, Any]], exclude_repos: Iterable[str] = ()
) -> LanguageTotals:
    """
    Sum language sizes across repository nodes.

    - Excluded repositories do not count towards total_repos.
    - Edges with size <= 0 are ignored.
    - count is the number of repositories contributing to a language.
    """
    hidden = set(exclude_repos)
    kept = [repo for repo in repos if repo.get("name") not in hidden]

    languages: Dict[str, LanguageTotal] = {}
    for repo in kept:
        edges = (repo.get("languages") or {}).get("edges") or []
        for edge in edges:
            size = edge.get("size") or 0
            if size <= 0:
                continue
            node = edge.get("node") or {}
            name = node["name"]
            entry = languages.get(name)
            if entry is None:
                languages[name] = LanguageTotal(
                    name=name, color=node.get("color"), size=size, count=1
                )
            else:
                entry.size += size
                entry.count += 1

    return LanguageTotals(languages=languages, total_repos=len(kept))


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github.v3+json",
        }
        if token:
            self.headers["Authorization"] = f"token {token}"

    def get_user(self, username: str) -> GitHubUser:
        resp = self.session.get(
            f"{GITHUB_API_URL}/users/{username}",
            headers=self.headers,
            timeout=self.timeout,
        )
        raise_for_status(resp, f'GitHub user "{username}" not found')
        return GitHubUser.model_validate(resp.json())

    def _graphql(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.session.post(
            GITHUB_GRAPHQL_URL,
            json={"query": LANGUAGES_QUERY, "variables": variables},
            headers=self.headers,
            timeout=self.timeout,
        )
        raise_for_status(resp, f'GitHub user "{variables["login"]}" not found')
        body = resp.json()

        errors = body.get("errors") or []
        if errors:
            first = errors[0]
            if first.get("type") == "NOT_FOUND":
                raise UserNotFound(first.get("message") or "Could not fetch user.")
            raise GitHubAPIError(first.get("message") or "GraphQL API error")
        return body["data"]

    def list_repositories(self, username: str) -> List[Dict[str, Any]]:
        repos: List[Dict[str, Any]] = []
        after = None
        while True:
            data = self._graphql({
                "login": username,
                "first": REPOS_PER_PAGE,
                "languages": LANGUAGES_PER_REPO,
                "after": after,
            })
            user = data.get("user")
            if user is None:
                raise UserNotFound(f'GitHub user "{username}" not found')

            page = user["repositories"]
            repos.extend(page.get("nodes") or [])

            info = page.get("pageInfo") or {}
            if not info.get("hasNextPage"):
                break
            after = info.get("endCursor")

        logger.debug("Fetched %d repositories for %s", len(repos), username)
        return repos

    def get_language_totals(
        self, username: str, exclude_repos: Iterable[str] = ()
    ) -> LanguageTotals:
        return collect_totals(self.list_repositories(username), exclude_repos)
