# employee-directory-api/app/api/graphql/schema.py
import logging
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from app.api.graphql.context import get_context
from app.api.graphql.mutations import Mutation
from app.api.graphql.queries import Query
from app.core.config import settings
from app.core.exceptions import AppError

logger = logging.getLogger(__name__)

# Expected outcomes of the auth guards, not worth a log line
QUIET_CODES = {"UNAUTHENTICATED", "FORBIDDEN"}


def is_unexpected(error: GraphQLError) -> bool:
    return error.original_error is not None and not isinstance(error.original_error, AppError)


class InternalErrorMask(MaskErrors):
    """Hides the message of any exception that is not an AppError."""

    def __init__(self):
        super().__init__(should_mask_error=is_unexpected, error_message="Internal server error")

    def anonymise_error(self, error: GraphQLError) -> GraphQLError:
        return GraphQLError(
            self.error_message,
            nodes=error.nodes,
            source=error.source,
            positions=error.positions,
            path=error.path,
            extensions={"code": "INTERNAL_SERVER_ERROR"},
        )


class EmployeeSchema(strawberry.Schema):
    def process_errors(self, errors: List[GraphQLError], execution_context: Optional[ExecutionContext] = None) -> None:
        for error in errors:
            original = error.original_error
            if isinstance(original, AppError):
                if original.code not in QUIET_CODES:
                    logger.warning("GraphQL error [%s]: %s", original.code, original.message)
            elif original is not None:
                logger.error("GraphQL error: %s", error.message, exc_info=original)
            else:
                logger.warning("GraphQL error: %s", error.message)


schema = EmployeeSchema(query=Query, mutation=Mutation, extensions=[InternalErrorMask])

graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.DEBUG else None,
    allow_queries_via_get=False,
)
