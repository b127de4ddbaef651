"""Category and tag schemas; both share one shape."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.configs.settings import (
    TAXONOMY_DESCRIPTION_MAX_LENGTH,
    TAXONOMY_NAME_MAX_LENGTH,
    TAXONOMY_NAME_MIN_LENGTH,
)


class TaxonomyCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(
        ...,
        min_length=TAXONOMY_NAME_MIN_LENGTH,
        max_length=TAXONOMY_NAME_MAX_LENGTH,
        examples=["python"],
    )
    description: str | None = Field(
        default=None,
        max_length=TAXONOMY_DESCRIPTION_MAX_LENGTH,
        examples=["Posts about Python"],
    )


class TaxonomyUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(
        default=None,
        min_length=TAXONOMY_NAME_MIN_LENGTH,
        max_length=TAXONOMY_NAME_MAX_LENGTH,
    )
    description: str | None = Field(default=None, max_length=TAXONOMY_DESCRIPTION_MAX_LENGTH)

    @model_validator(mode="after")
    def check_not_empty(self) -> "TaxonomyUpdate":
        if not self.model_fields_set:
            mssg = "At least one field must be provided"
            raise ValueError(mssg)
        if "name" in self.model_fields_set and self.name is None:
            mssg = "Name cannot be null"
            raise ValueError(mssg)
        return self


class TaxonomySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class TaxonomyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    created_at: datetime = Field(alias="createdAt")


class CategoryCreate(TaxonomyCreate):
    """Category creation request body."""


class CategoryUpdate(TaxonomyUpdate):
    """Category update request body."""


class CategoryResponse(TaxonomyResponse):
    """Category as returned by the API."""


class TagCreate(TaxonomyCreate):
    """Tag creation request body."""


class TagUpdate(TaxonomyUpdate):
    """Tag update request body."""


class TagResponse(TaxonomyResponse):
    """Tag as returned by the API."""


class CategoryDetailResponse(BaseModel):
    message: str
    category: CategoryResponse


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]


class TagDetailResponse(BaseModel):
    message: str
    tag: TagResponse


class TagListResponse(BaseModel):
    tags: list[TagResponse]
