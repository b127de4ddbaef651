# app/routes/category.py

"""
Category Routes.

Plain CRUD over categories. These routes need no authentication.
Names are trimmed, 2 to 50 characters and unique; deleting a category
leaves its blogs uncategorised.
"""

from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import CategoryRepoDep
from app.errors.database import RecordNotFoundError
from app.schemas import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
    MessageResponse,
)

router = APIRouter(prefix="/category", tags=["🗂️ Categories"])

CATEGORY_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174222",
    "name": "python",
    "description": "Posts about Python",
    "createdAt": "2026-01-01T00:00:00Z",
}
NOT_FOUND_RESPONSE = {
    "description": "Category not found",
    "content": {
        "application/json": {"example": {"detail": "Category not found", "kind": "not_found"}},
    },
}


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=CategoryDetailResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a category",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Category created successfully",
                        "category": CATEGORY_EXAMPLE,
                    },
                },
            },
        },
        409: {
            "description": "Name taken",
            "content": {
                "application/json": {
                    "example": {"detail": "Category already exists", "kind": "conflict"},
                },
            },
        },
    },
    operation_id="categories_create",
)
async def create_category(
    category: CategoryCreate,
    repo: CategoryRepoDep,
) -> CategoryDetailResponse:
    db_category = await repo.create(category)
    return CategoryDetailResponse(
        message="Category created successfully",
        category=CategoryResponse.model_validate(db_category),
    )


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=CategoryListResponse,
    summary="List categories",
    operation_id="categories_list",
)
async def list_categories(repo: CategoryRepoDep) -> CategoryListResponse:
    categories = await repo.get_all()
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
    )


@router.get(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryDetailResponse,
    summary="Get category by id",
    responses={404: NOT_FOUND_RESPONSE},
    operation_id="categories_get",
)
async def get_category(category_id: UUID, repo: CategoryRepoDep) -> CategoryDetailResponse:
    category = await repo.get_or_raise(category_id)
    return CategoryDetailResponse(
        message="Category fetched successfully",
        category=CategoryResponse.model_validate(category),
    )


@router.put(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryDetailResponse,
    summary="Update category",
    responses={404: NOT_FOUND_RESPONSE, 409: {"description": "Name taken"}},
    operation_id="categories_update",
)
async def update_category(
    category_id: UUID,
    changes: CategoryUpdate,
    repo: CategoryRepoDep,
) -> CategoryDetailResponse:
    category = await repo.get_or_raise(category_id)
    category = await repo.update(category, changes)
    return CategoryDetailResponse(
        message="Category updated successfully",
        category=CategoryResponse.model_validate(category),
    )


@router.delete(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete category",
    responses={404: NOT_FOUND_RESPONSE},
    operation_id="categories_delete",
)
async def delete_category(category_id: UUID, repo: CategoryRepoDep) -> MessageResponse:
    if not await repo.delete(category_id):
        raise RecordNotFoundError(detail="Category not found")
    return MessageResponse(message="Category deleted successfully")
