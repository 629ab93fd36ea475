"""Document identifiers.

The store assigns an identifier on insert; components only ever check that
a caller-supplied id has the right shape before asking the store for it.
"""

from __future__ import annotations

import re
import uuid

from storefront.domain.exceptions import ValidationError

_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def new_id() -> str:
    """Generate a fresh 32-character lowercase hex identifier."""
    return uuid.uuid4().hex


def parse_id(raw: str | None, entity: str) -> str:
    """Validate a caller-supplied identifier for *entity*.

    Raises ValidationError when the id is missing or malformed.
    """
    if not raw:
        raise ValidationError(f"{entity} id is required")
    if not isinstance(raw, str) or not _ID_PATTERN.fullmatch(raw):
        raise ValidationError(f"invalid {entity} id")
    return raw
