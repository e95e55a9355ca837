from datetime import datetime
from typing import List, Optional
import uuid

from fastapi import Body, Path, Query
from pydantic import BaseModel, ConfigDict, Field

from app.config import Platform
from app.schemas.basic import PagePaginationParams


class SavePlatformTokenBody(BaseModel):
    platform: Platform = Field(..., description="Hosting platform the token belongs to")
    access_token: str = Field(..., description="Access token for the hosting platform")
    token_type: str = Field("bearer", max_length=50, description="Token type")
    scopes: Optional[List[str]] = Field(None, description="Scopes granted to the token")
    expires_at: Optional[datetime] = Field(None, description="Token expiry, informational only")


class PlatformTokenResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(..., description="Unique identifier")
    platform: Platform
    masked_token: str = Field(..., description="The masked access token")
    token_type: str
    scopes: Optional[List[str]] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PlatformTokenDBUpsertDTO(BaseModel):
    access_token: str = Field(..., description="Encrypted access token")
    masked_token: str = Field(..., description="Masked access token for display")
    token_type: str = Field("bearer", max_length=50)
    scopes: Optional[List[str]] = None
    expires_at: Optional[datetime] = None


class SavePlatformTokenRequest:
    def __init__(
        self,
        payload: SavePlatformTokenBody = Body(...),
    ):
        self.payload = payload


class PlatformPathRequest:
    def __init__(
        self,
        platform: Platform = Path(..., description="Hosting platform"),
    ):
        self.platform = platform


class ListRemoteRepositoriesRequest:
    def __init__(
        self,
        platform: Platform = Path(..., description="Hosting platform"),
        page: int = Query(1, ge=1, description="Page must be one or greater"),
        per_page: int = Query(20, ge=1, le=100, description="Items per page, between 1 and 100"),
    ):
        self.pagination = PagePaginationParams(page=page, per_page=per_page)
        self.platform = platform
