from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class UploadedDocument:
    """Domain model for an uploaded document (subset of DB columns)."""

    id: str
    owner_id: str
    original_name: str
    file_path: str
    mime_type: str
    size_bytes: int = 0


@dataclass(frozen=True)
class TextDocument:
    """Document whose text was extracted locally (PDFs)."""

    content: str
    page_count: int
    mime_type: str
    filename: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class Base64Document:
    """Document passed to the model as raw base64 bytes."""

    content: str
    size_bytes: int
    mime_type: str
    filename: str
    kind: Literal["base64"] = "base64"


PreparedDocument = TextDocument | Base64Document
