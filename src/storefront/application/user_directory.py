"""Application service: User Directory.

Profile records for storefront users. Emails are unique across the
directory; uniqueness is checked before each write, not enforced by the
store.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, PersistenceError, ValidationError
from storefront.domain.model import timestamps
from storefront.domain.model.identifiers import parse_id
from storefront.domain.model.timestamps import Clock
from storefront.domain.model.user import User, UserProfile
from storefront.domain.repository.document_store import (
    ID_FIELD,
    Document,
    DocumentStore,
    DocumentUpdate,
)
from storefront.domain.service.pagination import (
    Page,
    PageRequest,
    equality_filter,
    fetch_page,
)

logger = structlog.get_logger(__name__)

COLLECTION = "users"


class UserDirectory:

    def __init__(self, store: DocumentStore, clock: Clock = timestamps.utcnow) -> None:
        self._users = store.collection(COLLECTION)
        self._clock = clock

    def create(self, profile: UserProfile) -> User:
        self._ensure_email_free(profile.email)

        now = self._clock()
        user = User(id=None, profile=profile, created_at=now, updated_at=now)
        user.id = self._users.insert(self._to_document(user))
        logger.info("User created", user_id=user.id, role=profile.role)
        return user

    def get(self, user_id: str) -> User:
        user_id = parse_id(user_id, "user")
        raw = self._users.find_one({ID_FIELD: user_id})
        if raw is None:
            raise EntityNotFoundError("user not found")
        return self._to_domain(raw)

    def update(self, user_id: str, profile: UserProfile) -> User:
        user_id = parse_id(user_id, "user")
        self._ensure_email_free(profile.email, owner_id=user_id)

        raw = self._users.find_one_and_update(
            {ID_FIELD: user_id},
            DocumentUpdate(
                set={
                    **self._profile_fields(profile),
                    "updated_at": timestamps.to_storage(self._clock()),
                }
            ),
        )
        if raw is None:
            raise EntityNotFoundError("user not found")
        return self._to_domain(raw)

    def delete(self, user_id: str) -> None:
        user_id = parse_id(user_id, "user")
        if self._users.delete_one({ID_FIELD: user_id}) == 0:
            raise EntityNotFoundError("user not found")
        logger.info("User deleted", user_id=user_id)

    def list(self, role: str | None, page: int | None, limit: int | None) -> Page[User]:
        return fetch_page(
            self._users,
            equality_filter("role", role),
            PageRequest.normalize(page, limit),
            self._to_domain,
        )

    def _ensure_email_free(self, email: str, owner_id: str | None = None) -> None:
        existing = self._users.find_one({"email": email})
        if existing is not None and existing[ID_FIELD] != owner_id:
            raise ValidationError(f"email '{email}' is already registered")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _profile_fields(profile: UserProfile) -> Document:
        return {
            "email": profile.email,
            "first_name": profile.first_name,
            "last_name": profile.last_name,
            "role": profile.role,
            "phone": profile.phone,
            "address": profile.address,
        }

    @classmethod
    def _to_document(cls, user: User) -> Document:
        return {
            **cls._profile_fields(user.profile),
            "created_at": timestamps.to_storage(user.created_at),
            "updated_at": timestamps.to_storage(user.updated_at),
        }

    @staticmethod
    def _to_domain(raw: Document) -> User:
        try:
            return User(
                id=raw[ID_FIELD],
                profile=UserProfile(
                    email=raw["email"],
                    first_name=raw.get("first_name", ""),
                    last_name=raw.get("last_name", ""),
                    role=raw.get("role", ""),
                    phone=raw.get("phone", ""),
                    address=raw.get("address", ""),
                ),
                created_at=timestamps.from_storage(raw["created_at"]),
                updated_at=timestamps.from_storage(raw["updated_at"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"failed to decode user: {exc}") from exc
