"""GraphQL query templates for the viewer's starred repositories and releases."""

import re

# Starred repositories with every release's rendered description (5 per page)
STARRED_REPOS_QUERY = """
query StarredRepos($cursor: String) {
  viewer {
    starredRepositories(first: 5, after: $cursor, orderBy: { field: STARRED_AT, direction: DESC }) {
      totalCount
      pageInfo {
        startCursor
        hasPreviousPage
        endCursor
        hasNextPage
      }
      nodes {
        description
        languages(first: 100) {
          nodes {
            id
            name
          }
        }
        licenseInfo {
          spdxId
        }
        name
        owner {
          avatarUrl
          login
          url
        }
        primaryLanguage {
          id
          name
        }
        releases(first: 100, orderBy: { field: CREATED_AT, direction: DESC }) {
          nodes {
            descriptionHTML
            id
            isDraft
            isPrerelease
            name
            publishedAt
            url
          }
        }
        stargazerCount
        url
      }
    }
  }
  rateLimit {
    cost
    limit
    remaining
    used
    resetAt
  }
}
"""

# Starred repositories without release descriptions (20 per page).
# Descriptions are fetched on demand with RELEASE_DESCRIPTIONS_QUERY.
STARRED_REPOS_PAGE_QUERY = """
query StarredReposPage($cursor: String) {
  viewer {
    starredRepositories(first: 20, after: $cursor, orderBy: { field: STARRED_AT, direction: DESC }) {
      totalCount
      pageInfo {
        startCursor
        hasPreviousPage
        endCursor
        hasNextPage
      }
      nodes {
        description
        languages(first: 100) {
          nodes {
            id
            name
          }
        }
        licenseInfo {
          spdxId
        }
        name
        owner {
          avatarUrl
          login
          url
        }
        primaryLanguage {
          id
          name
        }
        releases(first: 100, orderBy: { field: CREATED_AT, direction: DESC }) {
          nodes {
            id
            isDraft
            isPrerelease
            name
            publishedAt
            url
          }
        }
        stargazerCount
        url
      }
    }
  }
  rateLimit {
    cost
    limit
    remaining
    used
    resetAt
  }
}
"""

# Rendered descriptions for a batch of release node IDs
RELEASE_DESCRIPTIONS_QUERY = """
query ReleaseDescriptions($releaseIds: [ID!]!) {
  nodes(ids: $releaseIds) {
    ... on Release {
      id
      descriptionHTML
    }
  }
  rateLimit {
    cost
    limit
    remaining
    used
    resetAt
  }
}
"""

# Query to check rate limit status
RATE_LIMIT_QUERY = """
query {
  rateLimit {
    cost
    limit
    remaining
    used
    resetAt
  }
}
"""

MAX_PAGE_SIZE = 100

_PAGE_SIZE_PATTERN = re.compile(r"(starredRepositories\(first:\s*)(\d+)")


def with_page_size(query: str, page_size: int) -> str:
    """
    Return a starred repositories query with a different page size.

    The page size is a literal in the query documents, so callers that need
    another size rewrite it here instead of passing a variable.

    Args:
        query: STARRED_REPOS_QUERY or STARRED_REPOS_PAGE_QUERY
        page_size: Number of repositories per page (1-100)

    Returns:
        Query string with the new page size

    Raises:
        ValueError: If page_size is out of range or the query has no page size
    """
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")

    new_query, count = _PAGE_SIZE_PATTERN.subn(rf"\g<1>{page_size}", query, count=1)
    if count == 0:
        raise ValueError("Query does not select starredRepositories(first: ...)")
    return new_query
