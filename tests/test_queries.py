"""Tests for starred_releases.queries."""

import pytest

from shapes import operation, query_tree, type_tree
from starred_releases.queries import (
    RATE_LIMIT_QUERY,
    RELEASE_DESCRIPTIONS_QUERY,
    STARRED_REPOS_PAGE_QUERY,
    STARRED_REPOS_QUERY,
    with_page_size,
)
from starred_releases.types import (
    RateLimitResponse,
    ReleaseDescriptionsResponse,
    StarredReposResponse,
    StarredReposWithDescriptionsResponse,
)


def field_argument(query, path, name):
    """Return the GraphQL literal of an argument on the field at `path`."""
    selection_set = operation(query).selection_set
    field = None
    for step in path:
        field = next(s for s in selection_set.selections if s.name.value == step)
        selection_set = field.selection_set
    argument = next(a for a in field.arguments if a.name.value == name)
    return argument.value


STARRED = ["viewer", "starredRepositories"]


class TestQueryMatchesType:
    """Each query requests exactly the fields its response type declares."""

    @pytest.mark.parametrize("query,response_type", [
        (STARRED_REPOS_QUERY, StarredReposWithDescriptionsResponse),
        (STARRED_REPOS_PAGE_QUERY, StarredReposResponse),
        (RELEASE_DESCRIPTIONS_QUERY, ReleaseDescriptionsResponse),
        (RATE_LIMIT_QUERY, RateLimitResponse),
    ])
    def test_selection_matches_declared_type(self, query, response_type):
        assert query_tree(query) == type_tree(response_type)

    def test_page_queries_differ_only_in_release_description(self):
        described = query_tree(STARRED_REPOS_QUERY)
        plain = query_tree(STARRED_REPOS_PAGE_QUERY)

        described_release = described["viewer"]["starredRepositories"]["nodes"]["releases"]["nodes"]
        plain_release = plain["viewer"]["starredRepositories"]["nodes"]["releases"]["nodes"]
        assert set(described_release) - set(plain_release) == {"descriptionHTML"}

        described_release.pop("descriptionHTML")
        assert described == plain

    def test_release_descriptions_query_is_narrow(self):
        tree = query_tree(RELEASE_DESCRIPTIONS_QUERY)

        assert set(tree) == {"nodes", "rateLimit"}
        assert tree["nodes"] == {"id": None, "descriptionHTML": None}


class TestQueryArguments:
    """Tests for literals and variables in the query documents."""

    def test_page_sizes(self):
        assert field_argument(STARRED_REPOS_QUERY, STARRED, "first").value == "5"
        assert field_argument(STARRED_REPOS_PAGE_QUERY, STARRED, "first").value == "20"

    @pytest.mark.parametrize("query", [STARRED_REPOS_QUERY, STARRED_REPOS_PAGE_QUERY])
    def test_starred_ordering_and_cursor(self, query):
        order_by = field_argument(query, STARRED, "orderBy")
        fields = {f.name.value: f.value.value for f in order_by.fields}
        assert fields == {"field": "STARRED_AT", "direction": "DESC"}

        after = field_argument(query, STARRED, "after")
        assert after.name.value == "cursor"

        variables = operation(query).variable_definitions
        assert [(v.variable.name.value, v.type.name.value) for v in variables] == [("cursor", "String")]

    @pytest.mark.parametrize("query", [STARRED_REPOS_QUERY, STARRED_REPOS_PAGE_QUERY])
    def test_nested_connection_limits(self, query):
        nodes = STARRED + ["nodes"]

        assert field_argument(query, nodes + ["languages"], "first").value == "100"
        assert field_argument(query, nodes + ["releases"], "first").value == "100"

        order_by = field_argument(query, nodes + ["releases"], "orderBy")
        fields = {f.name.value: f.value.value for f in order_by.fields}
        assert fields == {"field": "CREATED_AT", "direction": "DESC"}

    def test_release_ids_variable_is_non_null_list_of_ids(self):
        variables = operation(RELEASE_DESCRIPTIONS_QUERY).variable_definitions
        assert len(variables) == 1
        variable = variables[0]
        assert variable.variable.name.value == "releaseIds"
        # [ID!]!
        list_type = variable.type.type
        assert list_type.type.type.name.value == "ID"
        assert type(variable.type).__name__ == "NonNullTypeNode"
        assert type(list_type.type).__name__ == "NonNullTypeNode"

        ids = field_argument(RELEASE_DESCRIPTIONS_QUERY, ["nodes"], "ids")
        assert ids.name.value == "releaseIds"


class TestWithPageSize:
    """Tests for with_page_size."""

    def test_rewrites_page_size(self):
        query = with_page_size(STARRED_REPOS_PAGE_QUERY, 50)

        assert field_argument(query, STARRED, "first").value == "50"
        # Nested connections keep their own limits
        assert field_argument(query, STARRED + ["nodes", "releases"], "first").value == "100"
        assert query_tree(query) == query_tree(STARRED_REPOS_PAGE_QUERY)

    def test_rewrites_descriptions_variant(self):
        query = with_page_size(STARRED_REPOS_QUERY, 1)
        assert field_argument(query, STARRED, "first").value == "1"

    def test_does_not_modify_constant(self):
        with_page_size(STARRED_REPOS_PAGE_QUERY, 7)
        assert field_argument(STARRED_REPOS_PAGE_QUERY, STARRED, "first").value == "20"

    @pytest.mark.parametrize("page_size", [0, -1, 101])
    def test_out_of_range(self, page_size):
        with pytest.raises(ValueError, match="between 1 and 100"):
            with_page_size(STARRED_REPOS_PAGE_QUERY, page_size)

    def test_query_without_starred_repositories(self):
        with pytest.raises(ValueError, match="starredRepositories"):
            with_page_size(RELEASE_DESCRIPTIONS_QUERY, 10)
