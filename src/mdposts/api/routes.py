"""GraphQL endpoint."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mdposts.core.models import ContentContext
from mdposts.query.schema import execute_query


router = APIRouter(tags=["graphql"])


class GraphQLRequest(BaseModel):
    query: str
    variables: Optional[dict[str, Any]] = None
    operationName: Optional[str] = None


def get_content(request: Request) -> ContentContext:
    return request.app.state.content


@router.post("/graphql")
def graphql(body: GraphQLRequest, content: ContentContext = Depends(get_content)) -> JSONResponse:
    """Execute a query; responses follow the usual `{data, errors}` shape.

    Requests that fail before execution (syntax or validation errors)
    yield no data and a 400 status.
    """
    result = execute_query(content, body.query, body.variables, body.operationName)
    status = 400 if result.data is None and result.errors else 200
    return JSONResponse(result.formatted, status_code=status)
