"""GitHub GraphQL API client for the starred repositories and release queries."""

import time
from typing import Any, Dict, List, Optional

import requests

from .queries import RATE_LIMIT_QUERY
from .types import RateLimit
from .utils import calculate_wait_time, exponential_backoff, format_rate_limit_info


class GraphQLError(ValueError):
    """Raised when a GraphQL response carries an `errors` list."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        messages = [e.get('message', str(e)) for e in errors]
        super().__init__(f"GraphQL errors: {'; '.join(messages)}")


class GitHubGraphQLClient:
    """
    Sends query documents to the GitHub GraphQL endpoint.

    Every query in this package selects a top-level `rateLimit` block; the
    client keeps the most recent one so callers can pace themselves.
    """

    API_URL = "https://api.github.com/graphql"
    REQUEST_TIMEOUT = 30

    def __init__(self, token: str):
        """
        Initialize the GitHub GraphQL client.

        Args:
            token: GitHub Personal Access Token with read access to stars
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": "starred-releases",
        })

        self._rate_limit: Optional[RateLimit] = None

    @property
    def rate_limit(self) -> Optional[RateLimit]:
        """Last rateLimit block seen in a response, or None before the first one."""
        return self._rate_limit

    @exponential_backoff(
        max_retries=3,
        base_delay=2.0,
        exceptions=(requests.exceptions.RequestException,)
    )
    def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Execute a GraphQL query.

        Args:
            query: One of the query documents from starred_releases.queries
            variables: `cursor` or `releaseIds`, passed through unchanged

        Returns:
            The `data` member of the response

        Raises:
            requests.exceptions.RequestException: On network or HTTP errors
            GraphQLError: When the response lists errors
        """
        body: Dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        response = self.session.post(self.API_URL, json=body, timeout=self.REQUEST_TIMEOUT)
        response.raise_for_status()
        return self._unwrap(response.json())

    def _unwrap(self, result: Dict[str, Any]) -> Dict[str, Any]:
        # rateLimit is recorded even when errors accompany partial data
        data = result.get('data') or {}
        if data.get('rateLimit'):
            self._rate_limit = data['rateLimit']

        if result.get('errors'):
            raise GraphQLError(result['errors'])
        return data

    def check_rate_limit(self) -> Optional[RateLimit]:
        """
        Ask the API for the current rate limit and remember it.

        Returns:
            The rateLimit block, or None if the response had none
        """
        data = self.execute(RATE_LIMIT_QUERY)
        self._rate_limit = data.get('rateLimit') or None
        return self._rate_limit

    def wait_for_rate_limit(self, min_remaining: int = 100) -> None:
        """
        Sleep until the quota resets when fewer than `min_remaining` points are left.

        Nothing happens if the API does not report a rate limit.
        """
        rate_limit = self._rate_limit or self.check_rate_limit()
        if not rate_limit:
            return

        remaining = rate_limit.get('remaining', 0)
        reset_at = rate_limit.get('resetAt')
        if remaining >= min_remaining or not reset_at:
            return

        wait_time = calculate_wait_time(reset_at)
        if wait_time > 0:
            print(f"\n  Rate limit low ({remaining} remaining). Waiting {wait_time:.0f}s until reset...")
            time.sleep(wait_time)
            self.check_rate_limit()

    def get_rate_limit_info(self) -> str:
        """One-line rate limit status for progress output."""
        rate_limit = self._rate_limit or self.check_rate_limit()
        return format_rate_limit_info(rate_limit or {})
