from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, ConfigDict, computed_field, field_validator


class ClerkEmailAddress(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        extra="ignore",
    )

    id: Optional[str] = None
    email_address: str


class WebhookUserData(BaseModel):
    """`data` object of Clerk `user.created` / `user.updated` events"""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str
    first_name: Optional[str] = ""
    last_name: Optional[str] = ""
    image_url: Optional[str] = None
    primary_email_address_id: Optional[str] = None
    email_addresses: List[ClerkEmailAddress] = []

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def clean_names(cls, v):
        return v if v is not None else ""

    @computed_field
    @property
    def primary_email(self) -> Optional[str]:
        """Get the primary email address."""
        for email in self.email_addresses:
            if email.id and email.id == self.primary_email_address_id:
                return email.email_address

        # If no primary email, return the first one
        if self.email_addresses:
            return self.email_addresses[0].email_address

        return None

    @computed_field
    @property
    def full_name(self) -> Optional[str]:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
