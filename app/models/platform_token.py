from tortoise.models import Model
from tortoise import fields
import uuid

from app.config import Platform


class PlatformToken(Model):
    """
    Access token a user saved for a hosting platform, one per (user, platform)
    """

    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    user_id = fields.CharField(
        max_length=255, null=False, description="User identifier"
    )
    platform = fields.CharEnumField(
        Platform, max_length=20, description="Hosting platform the token belongs to"
    )
    access_token = fields.TextField(
        null=False, description="Encrypted access token for the platform"
    )

    masked_token = fields.TextField(
        null=False, description="Masked access token for display"
    )

    token_type = fields.CharField(
        max_length=50, default="bearer", description="Token type"
    )
    scopes = fields.JSONField(null=True, description="Scopes granted to the token")
    expires_at = fields.DatetimeField(null=True, description="Expiry reported by the user")

    created_at = fields.DatetimeField(
        auto_now_add=True, description="Record creation timestamp"
    )
    updated_at = fields.DatetimeField(
        auto_now=True, description="Record last update timestamp"
    )

    class Meta:
        table = "platform_tokens"
        table_description = "Per user platform access tokens"
        unique_together = (("user_id", "platform"),)

    def __str__(self):
        return f"PlatformToken(id={self.id}, user_id={self.user_id}, platform={self.platform})"

    def __repr__(self):
        return self.__str__()
