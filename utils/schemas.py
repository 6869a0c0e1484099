"""
Pydantic request / response schemas for the HTTP API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from auth.password import MAX_PASSWORD_BYTES, password_too_long
from config.settings import config


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    email: str = ""
    password: str = ""
    name: Optional[str] = None

    @model_validator(mode="after")
    def _check_credentials(self) -> "RegisterRequest":
        if not self.email or not self.password:
            raise ValueError("Email and password are required")
        if len(self.password) < config.password_min_length:
            raise ValueError(
                f"Password must be at least {config.password_min_length} characters"
            )
        if password_too_long(self.password):
            raise ValueError(
                f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes"
            )
        return self

    def display_name(self) -> str:
        """Explicit name, or the local part of the email."""
        if self.name and self.name.strip():
            return self.name.strip()
        return self.email.split("@")[0]


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""

    @model_validator(mode="after")
    def _check_credentials(self) -> "LoginRequest":
        if not self.email or not self.password:
            raise ValueError("Email and password are required")
        return self


class UserSummary(BaseModel):
    email: str
    name: Optional[str] = None


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserSummary


class MeResponse(_CamelModel):
    email: str
    name: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")


# ═══════════════════════════════════════════════════════════════════════════════
# History
# ═══════════════════════════════════════════════════════════════════════════════


class SaveTranslationRequest(_CamelModel):
    original: str = ""
    translated: str = ""
    from_lang: Optional[str] = Field(None, alias="fromLang")
    to_lang: Optional[str] = Field(None, alias="toLang")


class TranslationRecord(_CamelModel):
    id: str
    user_id: str = Field(..., alias="userId")
    original: str
    translated: str
    from_lang: Optional[str] = Field(None, alias="fromLang")
    to_lang: Optional[str] = Field(None, alias="toLang")
    timestamp: datetime

    # The web front end keys records by ``_id`` when deleting them.
    @computed_field(alias="_id")
    @property
    def record_key(self) -> str:
        return self.id

    @classmethod
    def from_row(cls, row: Any) -> "TranslationRecord":
        return cls(
            id=str(row.id),
            user_id=row.user_email,
            original=row.original,
            translated=row.translated,
            from_lang=row.from_lang,
            to_lang=row.to_lang,
            timestamp=row.created_at,
        )


class SaveTranslationResponse(BaseModel):
    success: bool = True
    message: str = "Translation saved"
    id: str


class ClearHistoryResponse(BaseModel):
    success: bool = True
    count: int
    message: str


class DeleteTranslationResponse(BaseModel):
    success: bool = True
    message: str = "Translation deleted"


# ═══════════════════════════════════════════════════════════════════════════════
# Translation proxy / health
# ═══════════════════════════════════════════════════════════════════════════════


class TranslateRequest(BaseModel):
    messages: List[Dict[str, Any]] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(None, gt=0)


class HealthResponse(_CamelModel):
    status: str = "ok"
    timestamp: datetime
    store_connected: bool = Field(..., alias="storeConnected")
