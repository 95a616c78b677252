"""Identity account model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AuthenticatedUser(BaseModel):
    """Account resolved from a caller's bearer token by the identity service."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
