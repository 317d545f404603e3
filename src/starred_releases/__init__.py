"""Release feed for a GitHub user's starred repositories using the GraphQL API."""

from .client import GitHubGraphQLClient, GraphQLError
from .fetcher import StarredReleasesFetcher

__version__ = "1.0.0"
__all__ = ["GitHubGraphQLClient", "GraphQLError", "StarredReleasesFetcher"]
