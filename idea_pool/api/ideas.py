"""Idea API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from idea_pool.api.dependencies import get_current_user_id, get_idea_service
from idea_pool.api.errors import raise_for_result
from idea_pool.schemas.idea import IdeaCreate, IdeaResponse, IdeaUpdate
from idea_pool.services.idea_service import IdeaService

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get("", response_model=list[IdeaResponse])
def get_ideas(
    user_id: Annotated[int, Depends(get_current_user_id)],
    idea_service: Annotated[IdeaService, Depends(get_idea_service)],
    page: str | None = None,
):
    """Get a page of the current user's ideas, highest score first."""
    ideas = idea_service.list(user_id, page)
    return [IdeaResponse.model_validate(idea) for idea in ideas]


@router.post("", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
def create_idea(
    idea_data: IdeaCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    idea_service: Annotated[IdeaService, Depends(get_idea_service)],
):
    """Create a new idea."""
    idea = idea_service.create(
        user_id,
        content=idea_data.content,
        impact=idea_data.impact,
        ease=idea_data.ease,
        confidence=idea_data.confidence,
    )
    return IdeaResponse.model_validate(idea)


@router.put("/{idea_id}", response_model=IdeaResponse)
def update_idea(
    idea_id: str,
    idea_data: IdeaUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    idea_service: Annotated[IdeaService, Depends(get_idea_service)],
):
    """Update an idea."""
    result = idea_service.update(
        idea_id,
        user_id,
        content=idea_data.content,
        impact=idea_data.impact,
        ease=idea_data.ease,
        confidence=idea_data.confidence,
    )
    raise_for_result(result)
    return IdeaResponse.model_validate(result.value)


@router.delete("/{idea_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_idea(
    idea_id: str,
    user_id: Annotated[int, Depends(get_current_user_id)],
    idea_service: Annotated[IdeaService, Depends(get_idea_service)],
):
    """Delete an idea."""
    raise_for_result(idea_service.delete(idea_id, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
