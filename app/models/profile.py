from tortoise.models import Model
from tortoise import fields
import uuid


class Profile(Model):
    """
    Profile model for storing user display information from clerk
    """

    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    user_id = fields.CharField(max_length=255, unique=True, description="User ID")

    email = fields.CharField(max_length=255, null=True, description="Email of user")
    full_name = fields.CharField(max_length=255, null=True, description="Display name of user")
    avatar_url = fields.CharField(max_length=500, null=True, description="Avatar image URL")

    # Timestamps
    created_at = fields.DatetimeField(
        auto_now_add=True, description="Record creation timestamp"
    )
    updated_at = fields.DatetimeField(
        auto_now=True, description="Record update timestamp"
    )

    class Meta:
        table = "profiles"
        table_description = "User profile information from Clerk"

    def __str__(self):
        return f"{self.full_name} ({self.email})"

    def __repr__(self):
        return self.__str__()
