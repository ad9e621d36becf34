"""
DTO grants: Grant (запись доступа в GrantStore), ProtectedResource (что отдаёт AccessGate).
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Grant(BaseModel):
    """Доступ держателя токена к набору ресурсов до expires_at. После создания не меняется."""

    token: str
    # Email покупателя или заглушка; на авторизацию не влияет.
    identity: str
    resource_set: frozenset[int] = Field(
        ...,
        description="Индексы файлов, которые покрывает grant",
    )
    expires_at: datetime = Field(..., description="Абсолютное время истечения (UTC)")

    model_config = {"frozen": True}

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


class ProtectedResource(BaseModel):
    """Файл для скачивания: байты и метаданные для заголовков ответа."""

    content: bytes
    media_type: str
    filename: str

    model_config = {"frozen": True}

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'
