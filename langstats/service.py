from __future__ import annotations

import logging
import re
from typing import Iterable

from .github import GitHubClient
from .models import LanguageReport
from .normalize import EmptyDistribution, normalize_languages
from .rules import DEFAULT_COUNT_WEIGHT, DEFAULT_SIZE_WEIGHT, USERNAME_PATTERN

logger = logging.getLogger(__name__)


class InvalidUsername(ValueError):
    pass


class NoLanguageData(EmptyDistribution):
    pass


def validate_username(username: str) -> str:
    if not username or not re.match(USERNAME_PATTERN, username):
        raise InvalidUsername("Invalid GitHub username format")
    return username


def build_report(
    client: GitHubClient,
    username: str,
    size_weight: float = DEFAULT_SIZE_WEIGHT,
    count_weight: float = DEFAULT_COUNT_WEIGHT,
    exclude_repos: Iterable[str] = (),
) -> LanguageReport:
    """
    Fetch, weight and normalize the language distribution of one user.

    Raises NoLanguageData when the user has no repository with a positive
    language size left after exclusion and weighting.
    """
    validate_username(username)
    logger.info("Generating language statistics for user: %s", username)

    user = client.get_user(username)
    totals = client.get_language_totals(username, exclude_repos)

    try:
        languages = normalize_languages(totals.languages, size_weight, count_weight)
    except EmptyDistribution:
        raise NoLanguageData(
            f'GitHub user "{user.display_name}" has no public repositories '
            "with language information"
        ) from None

    logger.info(
        "Found %d languages across %d repositories",
        len(languages),
        totals.total_repos,
    )
    return LanguageReport(
        username=username,
        display_name=user.display_name,
        total_repos=totals.total_repos,
        languages=languages,
    )
