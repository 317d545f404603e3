"""Response shapes for the queries in starred_releases.queries.

Keys are the GraphQL field names, so a decoded JSON response is directly an
instance of these types. Fields the GitHub schema marks nullable are Optional.
"""

from typing import List, Optional, TypedDict


class Language(TypedDict):
    id: str
    name: str


class LanguageConnection(TypedDict):
    nodes: List[Language]


class LicenseInfo(TypedDict):
    spdxId: Optional[str]


class Owner(TypedDict):
    avatarUrl: str
    login: str
    url: str


class PrimaryLanguage(TypedDict):
    id: str
    name: str


class Release(TypedDict):
    id: str
    isDraft: bool
    isPrerelease: bool
    name: Optional[str]
    publishedAt: Optional[str]
    url: str


class ReleaseWithDescription(Release):
    descriptionHTML: Optional[str]


class ReleaseConnection(TypedDict):
    nodes: List[Release]


class ReleaseWithDescriptionConnection(TypedDict):
    nodes: List[ReleaseWithDescription]


class RepositoryMetadata(TypedDict):
    """Repository fields other than its releases."""

    description: Optional[str]
    languages: LanguageConnection
    licenseInfo: Optional[LicenseInfo]
    name: str
    owner: Owner
    primaryLanguage: Optional[PrimaryLanguage]
    stargazerCount: int
    url: str


class Repository(RepositoryMetadata):
    releases: ReleaseConnection


class RepositoryWithDescriptions(RepositoryMetadata):
    releases: ReleaseWithDescriptionConnection


class PageInfo(TypedDict):
    startCursor: Optional[str]
    hasPreviousPage: bool
    endCursor: Optional[str]
    hasNextPage: bool


class StarredRepositoryConnection(TypedDict):
    totalCount: int
    pageInfo: PageInfo
    nodes: List[Repository]


class StarredRepositoryWithDescriptionsConnection(TypedDict):
    totalCount: int
    pageInfo: PageInfo
    nodes: List[RepositoryWithDescriptions]


class Viewer(TypedDict):
    starredRepositories: StarredRepositoryConnection


class ViewerWithDescriptions(TypedDict):
    starredRepositories: StarredRepositoryWithDescriptionsConnection


class RateLimit(TypedDict):
    cost: int
    limit: int
    remaining: int
    used: int
    resetAt: str


class StarredReposResponse(TypedDict):
    """Data returned by STARRED_REPOS_PAGE_QUERY."""

    viewer: Viewer
    rateLimit: RateLimit


class StarredReposWithDescriptionsResponse(TypedDict):
    """Data returned by STARRED_REPOS_QUERY."""

    viewer: ViewerWithDescriptions
    rateLimit: RateLimit


class ReleaseDescription(TypedDict):
    id: str
    descriptionHTML: Optional[str]


class ReleaseDescriptionsResponse(TypedDict):
    """Data returned by RELEASE_DESCRIPTIONS_QUERY.

    ``nodes`` follows the order of the requested IDs; an ID that no longer
    resolves comes back as None.
    """

    nodes: List[Optional[ReleaseDescription]]
    rateLimit: RateLimit


class RateLimitResponse(TypedDict):
    """Data returned by RATE_LIMIT_QUERY."""

    rateLimit: RateLimit


class ReleaseObj(Release):
    """A release together with the repository it belongs to.

    Used for a single chronological feed of releases across repositories.
    ``descriptionHTML`` stays None until it has been fetched.
    """

    descriptionHTML: Optional[str]
    repo: RepositoryMetadata
