"""Fetcher that walks the viewer's starred repositories and builds a release feed."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

import pandas as pd
from tqdm import tqdm

from .client import GitHubGraphQLClient
from .feed import description_map, flatten_releases, merge_descriptions
from .queries import (
    RELEASE_DESCRIPTIONS_QUERY,
    STARRED_REPOS_PAGE_QUERY,
    STARRED_REPOS_QUERY,
    with_page_size,
)
from .types import (
    ReleaseObj,
    Repository,
    RepositoryWithDescriptions,
    StarredReposResponse,
    StarredReposWithDescriptionsResponse,
)
from .utils import chunked


def release_to_row(release: ReleaseObj) -> Dict[str, Any]:
    """
    Flatten a ReleaseObj into a single table row.

    Args:
        release: Release with its repository metadata

    Returns:
        Dictionary of scalar columns
    """
    repo = release.get('repo', {}) or {}
    owner = repo.get('owner', {}) or {}
    license_info = repo.get('licenseInfo', {}) or {}
    primary_lang = repo.get('primaryLanguage', {}) or {}
    languages_nodes = repo.get('languages', {}) or {}
    languages = [lang.get('name') for lang in languages_nodes.get('nodes', []) if lang]

    return {
        'id': release.get('id', ''),
        'name': release.get('name') or '',
        'url': release.get('url', ''),
        'published_at': release.get('publishedAt') or '',
        'is_draft': release.get('isDraft', False),
        'is_prerelease': release.get('isPrerelease', False),
        'description_html': release.get('descriptionHTML') or '',

        'repo_name': repo.get('name', ''),
        'repo_owner': owner.get('login', ''),
        'repo_owner_avatar_url': owner.get('avatarUrl', ''),
        'repo_url': repo.get('url', ''),
        'repo_description': repo.get('description') or '',
        'repo_stars': repo.get('stargazerCount', 0),
        'repo_license': license_info.get('spdxId') or '',
        'repo_primary_language': primary_lang.get('name', ''),
        'repo_languages': json.dumps(languages),
    }


class StarredReleasesFetcher:
    """Fetcher for the releases of the authenticated user's starred repositories."""

    # Maximum node IDs per nodes(ids:) lookup
    DESCRIPTION_BATCH_SIZE = 100

    # Minimum rate limit before waiting
    MIN_RATE_LIMIT = 100

    def __init__(
        self,
        token: str,
        page_size: int = 20,
        described_page_size: Optional[int] = None
    ):
        """
        Initialize the fetcher.

        Args:
            token: GitHub Personal Access Token
            page_size: Starred repositories per request (1-100)
            described_page_size: Page size when release descriptions come with
                every page (default: 5, as written in STARRED_REPOS_QUERY)
        """
        self.client = GitHubGraphQLClient(token)
        self.page_size = page_size
        self._page_query = with_page_size(STARRED_REPOS_PAGE_QUERY, page_size)
        if described_page_size is None:
            self._described_page_query = STARRED_REPOS_QUERY
        else:
            self._described_page_query = with_page_size(STARRED_REPOS_QUERY, described_page_size)

        # Repositories of the current feed build, flattened on demand
        self._repos: List[Repository] = []
        self._feed_options: Dict[str, bool] = {'include_drafts': False, 'include_prereleases': True}
        self._limit: Optional[int] = None
        self._releases: Optional[List[ReleaseObj]] = []

    @property
    def releases(self) -> List[ReleaseObj]:
        """
        Releases collected by the last fetch_release_feed call.

        If the build stopped while walking pages, this is the feed of the
        repositories fetched so far, with the same filters and limit.
        """
        if self._releases is None:
            self._releases = self._build_feed()
        return self._releases

    def _build_feed(self) -> List[ReleaseObj]:
        releases = flatten_releases(self._repos, **self._feed_options)
        if self._limit is not None:
            releases = releases[:self._limit]
        return releases

    def fetch_page(self, cursor: Optional[str] = None) -> StarredReposResponse:
        """
        Fetch one page of starred repositories without release descriptions.

        Args:
            cursor: endCursor of the previous page, passed through unchanged

        Returns:
            Response data for STARRED_REPOS_PAGE_QUERY
        """
        return self.client.execute(self._page_query, {"cursor": cursor})

    def fetch_page_with_descriptions(
        self,
        cursor: Optional[str] = None
    ) -> StarredReposWithDescriptionsResponse:
        """
        Fetch one page of starred repositories including every release description.

        Args:
            cursor: endCursor of the previous page, passed through unchanged

        Returns:
            Response data for STARRED_REPOS_QUERY
        """
        return self.client.execute(self._described_page_query, {"cursor": cursor})

    def iter_repositories(
        self,
        max_pages: Optional[int] = None,
        include_descriptions: bool = False
    ) -> Iterator[Union[Repository, RepositoryWithDescriptions]]:
        """
        Walk the starred repositories page by page.

        Args:
            max_pages: Stop after this many pages (None = all)
            include_descriptions: Request release descriptions with every page

        Yields:
            Repository nodes, most recently starred first
        """
        fetch = self.fetch_page_with_descriptions if include_descriptions else self.fetch_page
        cursor = None
        pages = 0

        with tqdm(desc="Fetching starred repos", unit="repo") as pbar:
            while max_pages is None or pages < max_pages:
                self.client.wait_for_rate_limit(self.MIN_RATE_LIMIT)

                data = fetch(cursor)
                pages += 1

                starred = data.get('viewer', {}).get('starredRepositories', {})
                nodes = starred.get('nodes', [])
                page_info = starred.get('pageInfo', {})

                if pbar.total is None and 'totalCount' in starred:
                    pbar.total = starred['totalCount']
                    pbar.refresh()

                for node in nodes:
                    if node:
                        pbar.update(1)
                        yield node

                remaining_requests = self.client.rate_limit.get('remaining', '?') if self.client.rate_limit else '?'
                pbar.set_postfix({'rate_limit': remaining_requests})

                if not nodes or not page_info.get('hasNextPage', False):
                    break
                cursor = page_info.get('endCursor')

    def fetch_release_descriptions(
        self,
        release_ids: Iterable[str],
        batch_size: Optional[int] = None
    ) -> Dict[str, Optional[str]]:
        """
        Fetch descriptionHTML for the given releases.

        Args:
            release_ids: Release node IDs
            batch_size: IDs per request (default DESCRIPTION_BATCH_SIZE)

        Returns:
            Mapping of release ID to descriptionHTML
        """
        descriptions: Dict[str, Optional[str]] = {}
        unique_ids = list(dict.fromkeys(release_ids))

        for batch in chunked(unique_ids, batch_size or self.DESCRIPTION_BATCH_SIZE):
            self.client.wait_for_rate_limit(self.MIN_RATE_LIMIT)
            data = self.client.execute(RELEASE_DESCRIPTIONS_QUERY, {"releaseIds": batch})
            descriptions.update(description_map(data))

        return descriptions

    def fetch_release_feed(
        self,
        max_pages: Optional[int] = None,
        include_drafts: bool = False,
        include_prereleases: bool = True,
        with_descriptions: bool = False,
        limit: Optional[int] = None
    ) -> List[ReleaseObj]:
        """
        Build the release feed for the viewer's starred repositories.

        Descriptions are requested only for the releases that end up in the
        feed, after filtering and limiting.

        Args:
            max_pages: Maximum pages of starred repositories (None = all)
            include_drafts: Keep draft releases
            include_prereleases: Keep prereleases
            with_descriptions: Fetch descriptionHTML for the feed
            limit: Keep only the newest N releases

        Returns:
            List of ReleaseObj dictionaries, newest first

        Raises:
            ValueError: If limit is negative
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")

        self._repos = []
        self._feed_options = {'include_drafts': include_drafts, 'include_prereleases': include_prereleases}
        self._limit = limit
        self._releases = None

        print(f"{self.client.get_rate_limit_info()}")

        for repo in self.iter_repositories(max_pages):
            self._repos.append(repo)
            self._releases = None

        self._releases = self._build_feed()

        if with_descriptions and self._releases:
            print(f"\nFetching descriptions for {len(self._releases)} releases...")
            descriptions = self.fetch_release_descriptions(r['id'] for r in self._releases)
            self._releases = merge_descriptions(self._releases, descriptions)

        print(f"\nFetched {len(self._releases)} releases from {len(self._repos)} starred repositories")
        print(f"{self.client.get_rate_limit_info()}")

        return self._releases

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert fetched releases to DataFrame.

        Returns:
            DataFrame with one row per release
        """
        releases = self.releases
        if not releases:
            return pd.DataFrame()

        return pd.DataFrame([release_to_row(r) for r in releases])

    def save_to_parquet(self, output_path: Path) -> None:
        """
        Save fetched releases to parquet file.

        Args:
            output_path: Path to output parquet file
        """
        df = self.to_dataframe()
        if df.empty:
            print("No data to save.")
            return

        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_parquet(output_path, index=False)
        print(f"Saved {len(df)} releases to {output_path}")

    def save_to_csv(self, output_path: Path) -> None:
        """
        Save fetched releases to CSV file.

        Args:
            output_path: Path to output CSV file
        """
        df = self.to_dataframe()
        if df.empty:
            print("No data to save.")
            return

        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False)
        print(f"Saved {len(df)} releases to {output_path}")
