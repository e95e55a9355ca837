from tortoise.models import Model
from tortoise import fields
import uuid

from app.config import Platform, RepositoryStatus


class Repository(Model):
    """
    Repository reference registered by a user, with lightweight metadata fetched from its platform
    """

    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    user_id = fields.CharField(
        max_length=255, description="User ID who owns this repository"
    )

    platform = fields.CharEnumField(
        Platform, max_length=20, description="Hosting platform (github/gitlab/replit/lovable)"
    )
    repo_url = fields.CharField(max_length=500, description="Repository URL as entered by the user")
    repo_name = fields.CharField(max_length=255, description="Repository name parsed from the URL")
    repo_owner = fields.CharField(max_length=255, description="Repository owner parsed from the URL")

    is_private = fields.BooleanField(
        default=False, description="Whether repository is private"
    )

    status = fields.CharEnumField(
        RepositoryStatus,
        max_length=20,
        default=RepositoryStatus.PENDING,
        description="Connection status",
    )
    error_message = fields.TextField(
        null=True, description="Last refresh/reconnect failure reason"
    )

    metadata = fields.JSONField(default=dict, description="Platform metadata, every key optional")

    last_synced_at = fields.DatetimeField(
        null=True, description="Last successful or failed metadata sync"
    )

    # Timestamps
    created_at = fields.DatetimeField(
        auto_now_add=True, description="Record creation timestamp"
    )
    updated_at = fields.DatetimeField(
        auto_now=True, description="Record update timestamp"
    )

    class Meta:
        table = "repositories"
        table_description = "Repositories connected by users"
        unique_together = (("user_id", "repo_url"),)
        indexes = [
            ("user_id", "created_at"),
            ("user_id", "platform"),
        ]

    def __str__(self):
        return f"{self.repo_owner}/{self.repo_name} ({self.platform})"
