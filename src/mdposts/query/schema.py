"""GraphQL schema for the post collection, executed with graphql-core"""

from functools import lru_cache
from typing import Any

from graphql import ExecutionResult, GraphQLSchema, build_schema, graphql_sync

from mdposts.core.models import ContentContext
from mdposts.query import resolvers


TYPE_DEFS = """
type Query {
  posts(published: Boolean): [Post]
  post(slug: String): Post
}

type Post {
  html(htmlEntities: Boolean = false): String
  metadata: PostMetadata
}

type PostMetadata {
  title: String
  folder: String
  slug: String
  description: String
  author: String
  date(displayAs: String): String
  tags: [String]
  banner: String
  bannerCredit: String
  published: Boolean
  publisher: String
  publish_url: String
  canonical_url: String
}
"""


def _posts(_root, info, published=None):
    return resolvers.posts(info.context, published)


def _post(_root, info, slug=None):
    return resolvers.post(info.context, slug) if slug is not None else None


def _html(post, _info, htmlEntities=False):
    return resolvers.post_html(post, bool(htmlEntities))


def _date(metadata, _info, displayAs=None):
    return resolvers.metadata_date(metadata, displayAs)


def _banner_credit(metadata, _info):
    return metadata.banner_credit


def _canonical_url(metadata, info):
    return resolvers.canonical_url(metadata, info.context.settings)


@lru_cache(maxsize=None)
def make_schema() -> GraphQLSchema:
    """Build the schema from TYPE_DEFS and attach the resolvers."""
    schema = build_schema(TYPE_DEFS)
    query = schema.query_type.fields
    query['posts'].resolve = _posts
    query['post'].resolve = _post

    schema.type_map['Post'].fields['html'].resolve = _html

    metadata = schema.type_map['PostMetadata'].fields
    metadata['date'].resolve = _date
    metadata['bannerCredit'].resolve = _banner_credit
    metadata['canonical_url'].resolve = _canonical_url
    return schema


def execute_query(
    context: ContentContext,
    query: str,
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
    ) -> ExecutionResult:
    """Run a GraphQL query against the given content context."""
    return graphql_sync(
        make_schema(),
        query,
        context_value=context,
        variable_values=variables,
        operation_name=operation_name,
    )
