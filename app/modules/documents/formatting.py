"""Display helpers and the plain-text export for documents without a blob."""
from datetime import datetime
from typing import Optional, Union

TEXT_EXPORT_MEDIA_TYPE = "text/plain; charset=utf-8"
UNKNOWN_OWNER = "unknown"
EMPTY_CONTENT = "(no content)"


def format_file_size(size: Optional[int]) -> str:
    if not size:
        return "-"
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def format_timestamp(value: Union[datetime, str, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime("%Y-%m-%d %H:%M:%S")


def render_text_export(
    title: str,
    created_at: Union[datetime, str, None],
    owner_email: Optional[str],
    content: Optional[str],
) -> str:
    return (
        f"Title: {title}\n"
        f"Created: {format_timestamp(created_at)}\n"
        f"Owner: {owner_email or UNKNOWN_OWNER}\n"
        f"\n"
        f"Content:\n"
        f"{content or EMPTY_CONTENT}"
    )


def text_export_file_name(title: str) -> str:
    # Path separators would turn the title into a directory on save
    safe = title.replace("/", "_").replace("\\", "_").strip() or "document"
    return f"{safe}.txt"
