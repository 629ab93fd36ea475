"""User profile record kept by the user directory."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class UserProfile:
    """The editable fields of a user."""

    email: str
    first_name: str = ""
    last_name: str = ""
    role: str = ""
    phone: str = ""
    address: str = ""

    @staticmethod
    def of(
        email: str,
        first_name: str = "",
        last_name: str = "",
        role: str = "",
        phone: str = "",
        address: str = "",
    ) -> UserProfile:
        if not email or not email.strip():
            raise ValidationError("email is required")
        return UserProfile(
            email=email.strip().lower(),
            first_name=first_name or "",
            last_name=last_name or "",
            role=role or "",
            phone=phone or "",
            address=address or "",
        )


@dataclass
class User:
    id: str | None
    profile: UserProfile
    created_at: datetime
    updated_at: datetime
