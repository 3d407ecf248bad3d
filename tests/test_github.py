import pytest

from langstats.github import (
    AuthenticationFailed,
    GitHubAPIError,
    GitHubClient,
    RateLimitExceeded,
    UserNotFound,
    collect_totals,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, reason="OK"):
        self.payload = payload
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, get=None, posts=()):
        self.get_response = get
        self.post_responses = list(posts)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self.get_response

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return self.post_responses.pop(0)


def repo(name, *edges):
    return {
        "name": name,
        "languages": {
            "edges": [
                {"size": size, "node": {"name": lang, "color": "#000000"}}
                for lang, size in edges
            ]
        },
    }


def page(nodes, cursor=None):
    return FakeResponse({
        "data": {
            "user": {
                "repositories": {
                    "pageInfo": {"hasNextPage": cursor is not None, "endCursor": cursor},
                    "nodes": nodes,
                }
            }
        }
    })


def test_collect_totals_sums_and_counts():
    totals = collect_totals([
        repo("one", ("Python", 100), ("Shell", 10)),
        repo("two", ("Python", 50), ("Empty", 0)),
        repo("three"),
    ])

    assert totals.total_repos == 3
    assert set(totals.languages) == {"Python", "Shell"}
    assert totals.languages["Python"].size == 150
    assert totals.languages["Python"].count == 2
    assert totals.languages["Shell"].color == "#000000"


def test_collect_totals_excludes_repos():
    totals = collect_totals(
        [repo("keep", ("Go", 5)), repo("hide", ("Rust", 50))],
        exclude_repos=["hide"],
    )
    assert totals.total_repos == 1
    assert list(totals.languages) == ["Go"]


def test_get_user_sends_token():
    session = FakeSession(get=FakeResponse({"login": "octocat", "name": None, "public_repos": 8}))
    client = GitHubClient(token="abc", session=session)

    user = client.get_user("octocat")

    assert user.display_name == "octocat"
    method, url, kwargs = session.calls[0]
    assert url == "https://api.github.com/users/octocat"
    assert kwargs["headers"]["Authorization"] == "token abc"


def test_no_token_no_authorization_header():
    client = GitHubClient(session=FakeSession())
    assert "Authorization" not in client.headers


@pytest.mark.parametrize(
    "status, error",
    [
        (404, UserNotFound),
        (403, RateLimitExceeded),
        (401, AuthenticationFailed),
        (500, GitHubAPIError),
    ],
)
def test_get_user_error_classification(status, error):
    session = FakeSession(get=FakeResponse({}, status_code=status, reason="Nope"))
    with pytest.raises(error) as excinfo:
        GitHubClient(session=session).get_user("octocat")
    assert excinfo.value.status_code in (404, 429, 401, 502)


def test_language_totals_follow_pages():
    session = FakeSession(posts=[
        page([repo("a", ("Python", 10))], cursor="c1"),
        page([repo("b", ("Python", 5), ("C", 1))]),
    ])

    totals = GitHubClient(session=session).get_language_totals("octocat")

    assert totals.total_repos == 2
    assert totals.languages["Python"].size == 15
    assert totals.languages["C"].count == 1
    second = session.calls[1][2]["json"]["variables"]
    assert second["after"] == "c1"
    assert second["login"] == "octocat"


def test_graphql_not_found():
    session = FakeSession(posts=[
        FakeResponse({"data": {"user": None}, "errors": [
            {"type": "NOT_FOUND", "message": "Could not resolve to a User"}
        ]}),
    ])
    with pytest.raises(UserNotFound, match="Could not resolve"):
        GitHubClient(session=session).get_language_totals("ghost")


def test_graphql_other_error():
    session = FakeSession(posts=[FakeResponse({"errors": [{"message": "boom"}]})])
    with pytest.raises(GitHubAPIError, match="boom"):
        GitHubClient(session=session).get_language_totals("octocat")


def test_graphql_rate_limited():
    session = FakeSession(posts=[FakeResponse({}, status_code=403)])
    with pytest.raises(RateLimitExceeded) as excinfo:
        GitHubClient(session=session).get_language_totals("octocat")
    assert excinfo.value.retry_after == 3600
