import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from fastapi import Body, Path, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config import Platform, RepositoryStatus


class RepositoryMetadata(BaseModel):
    """Lightweight repository metadata, every key is optional"""

    model_config = ConfigDict(extra="ignore")

    stars: Optional[int] = Field(None, description="Number of stars", ge=0)
    forks: Optional[int] = Field(None, description="Number of forks", ge=0)
    language: Optional[str] = Field(None, description="Primary programming language")
    description: Optional[str] = Field(None, description="Repository description")
    last_commit: Optional[str] = Field(
        None, description="Timestamp of the latest push or activity"
    )
    default_branch: Optional[str] = Field(None, description="Default branch name")


class ReplitMetadata(RepositoryMetadata):
    last_run: Optional[str] = Field(None, description="Timestamp of the last run")


class LovableMetadata(RepositoryMetadata):
    framework: Optional[str] = Field(None, description="Framework used by the project")
    last_deployment: Optional[str] = Field(
        None, description="Timestamp of the last deployment"
    )


_METADATA_MODELS: Dict[Platform, Type[RepositoryMetadata]] = {
    Platform.REPLIT: ReplitMetadata,
    Platform.LOVABLE: LovableMetadata,
}


def metadata_model_for(platform: Platform) -> Type[RepositoryMetadata]:
    return _METADATA_MODELS.get(platform, RepositoryMetadata)


class ConnectRepositoryBody(BaseModel):
    platform: Platform = Field(..., description="Hosting platform of the repository")
    repo_url: str = Field(
        ..., min_length=1, max_length=500, description="Repository URL as shown in the browser"
    )

    @field_validator("repo_url", mode="before")
    @classmethod
    def strip_repo_url(cls, v):
        return v.strip() if isinstance(v, str) else v


class FetchMetadataBody(BaseModel):
    platform: Platform = Field(..., description="Hosting platform of the repository")
    owner: str = Field(..., min_length=1, max_length=255, description="Repository owner")
    repo: str = Field(..., min_length=1, max_length=255, description="Repository name")


class FetchMetadataResponse(BaseModel):
    metadata: Dict[str, Any] = Field(default_factory=dict)
    is_private: bool = False


class RepositoryResponse(BaseModel):
    """Schema for repository response"""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(..., description="Primary key")
    platform: Platform
    repo_url: str
    repo_name: str
    repo_owner: str
    is_private: bool = False
    status: RepositoryStatus
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    last_synced_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, v):
        return v or {}


class RepositoryStats(BaseModel):
    total: int = Field(0, ge=0)
    connected: int = Field(0, ge=0)
    failed: int = Field(0, ge=0)
    pending: int = Field(0, ge=0)
    limit: int = Field(..., ge=0, description="Maximum repositories per user")


class RepositoryListResponse(BaseModel):
    items: List[RepositoryResponse]
    stats: RepositoryStats


class RepositoryDBCreateDTO(BaseModel):
    platform: Platform
    repo_url: str = Field(..., max_length=500)
    repo_name: str = Field(..., max_length=255)
    repo_owner: str = Field(..., max_length=255)
    is_private: bool = False
    status: RepositoryStatus = RepositoryStatus.CONNECTED
    metadata: Dict[str, Any] = Field(default_factory=dict)
    last_synced_at: Optional[datetime] = None


class PlatformFilter(str, Enum):
    ALL = "all"
    GITHUB = Platform.GITHUB.value
    GITLAB = Platform.GITLAB.value
    REPLIT = Platform.REPLIT.value
    LOVABLE = Platform.LOVABLE.value


class ListRepositoriesRequest:
    def __init__(
        self,
        search: Optional[str] = Query(
            None, max_length=255, description="Case-insensitive match on name or owner"
        ),
        platform: PlatformFilter = Query(
            PlatformFilter.ALL, description="Restrict the list to one platform"
        ),
    ):
        self.search = search
        self.platform = None if platform == PlatformFilter.ALL else Platform(platform.value)


class RepositoryIdRequest:
    def __init__(
        self,
        repository_id: uuid.UUID = Path(..., description="The repository id"),
    ):
        self.repository_id = repository_id


class ConnectRepositoryRequest:
    def __init__(
        self,
        payload: ConnectRepositoryBody = Body(...),
    ):
        self.payload = payload


class FetchMetadataRequest:
    def __init__(
        self,
        payload: FetchMetadataBody = Body(...),
    ):
        self.payload = payload
