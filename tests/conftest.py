import pytest

from langstats.models import GitHubUser, LanguageTotal, LanguageTotals


class FakeClient:
    """Stands in for GitHubClient without touching the network."""

    def __init__(self, sizes=None, name="The Octocat", error=None):
        self.sizes = {"Python": 600, "JavaScript": 300, "Shell": 100} if sizes is None else sizes
        self.name = name
        self.error = error
        self.excluded = None

    def get_user(self, username):
        if self.error is not None:
            raise self.error
        return GitHubUser(login=username, name=self.name, public_repos=3)

    def get_language_totals(self, username, exclude_repos=()):
        self.excluded = list(exclude_repos)
        languages = {
            name: LanguageTotal(name=name, size=size, count=1)
            for name, size in self.sizes.items()
        }
        return LanguageTotals(languages=languages, total_repos=3)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def make_client():
    return FakeClient
