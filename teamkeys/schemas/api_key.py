from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from teamkeys.core.pagination import Pagination
from teamkeys.models.api_key import ApiKey


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ApiKeyCreate(CamelModel):
    """Body of apiKeys.create. The owner is always the actor, never a body field."""

    name: str = Field(..., min_length=1, max_length=255)
    expires_at: Optional[datetime] = Field(None)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("expires_at")
    @classmethod
    def expires_in_future(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None:
            return v
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        if v <= datetime.now(timezone.utc):
            raise ValueError("expiresAt must be in the future")
        return v


class ApiKeyList(CamelModel):
    """Body of apiKeys.list."""

    user_id: Optional[UUID] = Field(None)


class ApiKeyDelete(CamelModel):
    """Body of apiKeys.delete."""

    id: UUID


class ApiKeyResponse(CamelModel):
    """Presented API key, safe to return at any time."""

    id: str
    name: str
    user_id: str
    last4: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    last_active_at: Optional[datetime] = None


class ApiKeyWithSecretResponse(ApiKeyResponse):
    """Presented API key including the raw secret, only ever returned by create."""

    value: str


class ApiKeyCreateResponse(CamelModel):
    data: ApiKeyWithSecretResponse


class ApiKeyListResponse(CamelModel):
    pagination: Pagination
    data: List[ApiKeyResponse]


class SuccessResponse(CamelModel):
    success: bool = True


def present_api_key(key: ApiKey) -> ApiKeyResponse:
    """
    Map a stored key to its external representation.

    The secret is included only when the instance still carries it, which is
    the case solely for the object returned by creation.
    """
    if key.value:
        return ApiKeyWithSecretResponse.model_validate(key)
    return ApiKeyResponse.model_validate(key)
