from pydantic import BaseModel, Field


class PagePaginationParams(BaseModel):
    """Page based pagination, mirrors what the hosting platforms accept."""

    page: int = Field(1, ge=1, description="Page must be one or greater")
    per_page: int = Field(
        20, ge=1, le=100, description="Items per page, between 1 and 100"
    )
