from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


def _require_text(value: str, field: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{field} is required")
    return value.strip()


class DocumentCreate(BaseModel):
    title: str
    content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _require_text(v, "title")


class DocumentLink(DocumentCreate):
    file_name: str  # name of a blob from the storage listing

    @field_validator("file_name")
    @classmethod
    def file_selected(cls, v: str) -> str:
        return _require_text(v, "file_name")


class DocumentResponse(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    file_size_label: str = "-"
    owner_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class StorageFileResponse(BaseModel):
    name: str
    id: Optional[str] = None
    size: Optional[int] = None
    mimetype: Optional[str] = None
    size_label: str = "-"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
