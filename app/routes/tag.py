# app/routes/tag.py

"""
Tag Routes.

CRUD over tags, open to unauthenticated callers. Tags are also created
implicitly when a blog names one that does not exist yet.
"""

from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import TagRepoDep
from app.errors.database import RecordNotFoundError
from app.schemas import (
    MessageResponse,
    TagCreate,
    TagDetailResponse,
    TagListResponse,
    TagResponse,
    TagUpdate,
)

router = APIRouter(prefix="/tag", tags=["🏷️ Tags"])

NOT_FOUND_RESPONSE = {
    "description": "Tag not found",
    "content": {
        "application/json": {"example": {"detail": "Tag not found", "kind": "not_found"}},
    },
}


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=TagDetailResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a tag",
    responses={
        409: {
            "description": "Name taken",
            "content": {
                "application/json": {
                    "example": {"detail": "Tag already exists", "kind": "conflict"},
                },
            },
        },
    },
    operation_id="tags_create",
)
async def create_tag(tag: TagCreate, repo: TagRepoDep) -> TagDetailResponse:
    db_tag = await repo.create(tag)
    return TagDetailResponse(
        message="Tag created successfully",
        tag=TagResponse.model_validate(db_tag),
    )


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=TagListResponse,
    summary="List tags",
    operation_id="tags_list",
)
async def list_tags(repo: TagRepoDep) -> TagListResponse:
    tags = await repo.get_all()
    return TagListResponse(tags=[TagResponse.model_validate(tag) for tag in tags])


@router.get(
    "/{tag_id}",
    response_class=ORJSONResponse,
    response_model=TagDetailResponse,
    summary="Get tag by id",
    responses={404: NOT_FOUND_RESPONSE},
    operation_id="tags_get",
)
async def get_tag(tag_id: UUID, repo: TagRepoDep) -> TagDetailResponse:
    tag = await repo.get_or_raise(tag_id)
    return TagDetailResponse(
        message="Tag fetched successfully",
        tag=TagResponse.model_validate(tag),
    )


@router.put(
    "/{tag_id}",
    response_class=ORJSONResponse,
    response_model=TagDetailResponse,
    summary="Update tag",
    responses={404: NOT_FOUND_RESPONSE, 409: {"description": "Name taken"}},
    operation_id="tags_update",
)
async def update_tag(tag_id: UUID, changes: TagUpdate, repo: TagRepoDep) -> TagDetailResponse:
    tag = await repo.get_or_raise(tag_id)
    tag = await repo.update(tag, changes)
    return TagDetailResponse(
        message="Tag updated successfully",
        tag=TagResponse.model_validate(tag),
    )


@router.delete(
    "/{tag_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete tag",
    description="The tag is also removed from every blog carrying it.",
    responses={404: NOT_FOUND_RESPONSE},
    operation_id="tags_delete",
)
async def delete_tag(tag_id: UUID, repo: TagRepoDep) -> MessageResponse:
    if not await repo.delete(tag_id):
        raise RecordNotFoundError(detail="Tag not found")
    return MessageResponse(message="Tag deleted successfully")
