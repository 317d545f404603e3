"""Pytest configuration and fixtures."""

import copy

import pytest


RATE_LIMIT = {
    "cost": 1,
    "limit": 5000,
    "remaining": 4999,
    "used": 1,
    "resetAt": "2026-10-19T12:00:00Z",
}

REPOSITORY = {
    "description": "A fast web framework",
    "languages": {
        "nodes": [
            {"id": "MDg6TGFuZ3VhZ2UxNDU=", "name": "Python"},
            {"id": "MDg6TGFuZ3VhZ2UxNDA=", "name": "Shell"},
        ]
    },
    "licenseInfo": {"spdxId": "MIT"},
    "name": "fastweb",
    "owner": {
        "avatarUrl": "https://avatars.githubusercontent.com/u/1?v=4",
        "login": "octo",
        "url": "https://github.com/octo",
    },
    "primaryLanguage": {"id": "MDg6TGFuZ3VhZ2UxNDU=", "name": "Python"},
    "releases": {
        "nodes": [
            {
                "id": "RE_kwDOAAABBB4AAAAC",
                "isDraft": False,
                "isPrerelease": True,
                "name": "v2.0.0rc1",
                "publishedAt": "2026-09-01T10:00:00Z",
                "url": "https://github.com/octo/fastweb/releases/tag/v2.0.0rc1",
            },
            {
                "id": "RE_kwDOAAABBB4AAAAB",
                "isDraft": False,
                "isPrerelease": False,
                "name": "v1.0.0",
                "publishedAt": "2026-01-15T08:30:00Z",
                "url": "https://github.com/octo/fastweb/releases/tag/v1.0.0",
            },
        ]
    },
    "stargazerCount": 1234,
    "url": "https://github.com/octo/fastweb",
}

OTHER_REPOSITORY = {
    "description": None,
    "languages": {"nodes": []},
    "licenseInfo": None,
    "name": "notes",
    "owner": {
        "avatarUrl": "https://avatars.githubusercontent.com/u/2?v=4",
        "login": "hubber",
        "url": "https://github.com/hubber",
    },
    "primaryLanguage": None,
    "releases": {
        "nodes": [
            {
                "id": "RE_kwDOCCCDDD4AAAAC",
                "isDraft": True,
                "isPrerelease": False,
                "name": None,
                "publishedAt": None,
                "url": "https://github.com/hubber/notes/releases/tag/untagged-1",
            },
            {
                "id": "RE_kwDOCCCDDD4AAAAB",
                "isDraft": False,
                "isPrerelease": False,
                "name": "2026.05",
                "publishedAt": "2026-05-20T00:00:00Z",
                "url": "https://github.com/hubber/notes/releases/tag/2026.05",
            },
        ]
    },
    "stargazerCount": 7,
    "url": "https://github.com/hubber/notes",
}


def make_page(nodes, end_cursor=None, has_next_page=False, total_count=None):
    """Build a StarredReposResponse payload."""
    return {
        "viewer": {
            "starredRepositories": {
                "totalCount": len(nodes) if total_count is None else total_count,
                "pageInfo": {
                    "startCursor": "Y3Vyc29yOnYyOpK5MjAyNi0xMC0wMVQwMDowMDowMFo=" if nodes else None,
                    "hasPreviousPage": False,
                    "endCursor": end_cursor,
                    "hasNextPage": has_next_page,
                },
                "nodes": nodes,
            }
        },
        "rateLimit": dict(RATE_LIMIT),
    }


@pytest.fixture
def rate_limit():
    """Rate limit block with 4999 points remaining."""
    return dict(RATE_LIMIT)


@pytest.fixture
def repository():
    """A repository with one prerelease and one stable release."""
    return copy.deepcopy(REPOSITORY)


@pytest.fixture
def other_repository():
    """A repository without license or language, with a draft release."""
    return copy.deepcopy(OTHER_REPOSITORY)


@pytest.fixture
def page_response(repository):
    """Single page StarredReposResponse with one repository."""
    return make_page([repository])


@pytest.fixture
def described_repository(repository):
    """The repository fixture as returned by the query that includes descriptions."""
    for index, release in enumerate(repository["releases"]["nodes"]):
        release["descriptionHTML"] = f"<p>Release notes {index}</p>"
    return repository


@pytest.fixture
def descriptions_response(rate_limit):
    """ReleaseDescriptionsResponse for the repository fixture releases."""
    return {
        "nodes": [
            {"id": "RE_kwDOAAABBB4AAAAC", "descriptionHTML": "<p>Release candidate</p>"},
            {"id": "RE_kwDOAAABBB4AAAAB", "descriptionHTML": "<p>First stable</p>"},
        ],
        "rateLimit": rate_limit,
    }
