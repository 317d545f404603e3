"""Flatten repository-grouped releases into a single chronological feed."""

from typing import Dict, Iterable, List, Mapping, Optional, Union

from .types import (
    ReleaseDescriptionsResponse,
    ReleaseObj,
    Repository,
    RepositoryMetadata,
    RepositoryWithDescriptions,
)
from .utils import parse_iso_datetime


def repository_metadata(
    repo: Union[Repository, RepositoryWithDescriptions]
) -> RepositoryMetadata:
    """Return the repository without its releases."""
    return {key: value for key, value in repo.items() if key != 'releases'}


def flatten_releases(
    repos: Iterable[Union[Repository, RepositoryWithDescriptions]],
    include_drafts: bool = False,
    include_prereleases: bool = True
) -> List[ReleaseObj]:
    """
    Build a release feed from starred repositories.

    Releases are ordered by publishedAt, newest first. Releases that were never
    published go last; equal timestamps keep their input order.

    Args:
        repos: Repository nodes from a starred repositories page
        include_drafts: Keep draft releases
        include_prereleases: Keep prereleases

    Returns:
        List of ReleaseObj dictionaries
    """
    published: List[ReleaseObj] = []
    unpublished: List[ReleaseObj] = []

    for repo in repos:
        metadata = repository_metadata(repo)
        for release in (repo.get('releases') or {}).get('nodes', []):
            if not release:
                continue
            if release['isDraft'] and not include_drafts:
                continue
            if release['isPrerelease'] and not include_prereleases:
                continue

            release_obj: ReleaseObj = {
                **release,
                'descriptionHTML': release.get('descriptionHTML'),
                'repo': metadata,
            }
            if release.get('publishedAt'):
                published.append(release_obj)
            else:
                unpublished.append(release_obj)

    published.sort(key=lambda r: parse_iso_datetime(r['publishedAt']), reverse=True)
    return published + unpublished


def description_map(response: ReleaseDescriptionsResponse) -> Dict[str, Optional[str]]:
    """Map release IDs to descriptionHTML, skipping IDs that did not resolve."""
    return {
        node['id']: node.get('descriptionHTML')
        for node in response.get('nodes', [])
        if node and node.get('id')
    }


def merge_descriptions(
    releases: Iterable[ReleaseObj],
    descriptions: Mapping[str, Optional[str]]
) -> List[ReleaseObj]:
    """
    Fill in descriptionHTML from a {release id: html} mapping.

    Releases missing from the mapping keep their current description.
    Returns copies; the input dictionaries are not modified.
    """
    return [
        {**release, 'descriptionHTML': descriptions.get(release['id'], release.get('descriptionHTML'))}
        for release in releases
    ]
