"""Domain value objects for discussions.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re

from pydantic import field_validator

from discuss.domain.value.common import RootValueObject


class Username(RootValueObject[str]):
    """Forum username.

    Usernames are what mentions (`@name`) refer to: letters, digits and
    underscores, 1-255 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_username_format(cls, v: str) -> str:
        """Validate username characters and length."""
        if not re.match(r"^[A-Za-z0-9_]{1,255}$", v):
            raise ValueError(
                "Username must be 1-255 characters of letters, digits or underscores"
            )
        return v
