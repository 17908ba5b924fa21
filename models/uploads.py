"""Upload collaborator models: pre-built nodes and data URL payloads."""

import base64
import binascii
from datetime import datetime
from typing import Any, Optional
from urllib.parse import unquote_to_bytes
from uuid import uuid4

from pydantic import BaseModel, Field

from models.errors import NodeValidationError
from models.file_node import FileKind, FileNode, join_path, kind_from_mime_type
from models.mutations import validate_name


class UploadedFile(BaseModel):
    """Metadata of a file handed over by the upload collaborator.

    Args:
        name: Original file name.
        mime_type: MIME type reported by the browser.
        size: Size in bytes.
        last_modified: Timestamp reported for the file.
    """

    name: str = Field(description="Original file name")
    mime_type: str = Field(default="application/octet-stream", description="MIME type")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    last_modified: datetime = Field(description="Last modification time of the file")

    @property
    def kind(self) -> FileKind:
        """Node kind derived from the MIME type."""
        return kind_from_mime_type(self.mime_type)


def build_upload_node(upload: UploadedFile, node_id: Optional[str] = None) -> FileNode:
    """Build the node the upload collaborator supplies to the store.

    The path is provisional (root-relative); ``insert_node`` places it in the
    target directory.

    Raises:
        NodeValidationError: If the file name is empty or invalid.
    """
    name = validate_name(upload.name)
    return FileNode(
        id=node_id or str(uuid4()),
        name=name,
        kind=upload.kind,
        path=join_path("/", name),
        modified_at=upload.last_modified,
        size=upload.size,
    )


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """Split a ``data:`` URL into its MIME type and decoded body.

    Args:
        data_url: A URL of the form ``data:<mime>[;base64],<payload>``.

    Returns:
        Tuple of (mime type, decoded bytes).

    Raises:
        NodeValidationError: If the URL is not a well-formed data URL.
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise NodeValidationError("Upload payload is not a data URL")
    header, _, payload = data_url[len("data:"):].partition(",")
    params = header.split(";")
    mime_type = params[0] or "text/plain"
    if "base64" in params[1:]:
        try:
            return mime_type, base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise NodeValidationError(f"Upload payload is not valid base64: {e}") from e
    return mime_type, unquote_to_bytes(payload)


def payload_for(kind: FileKind, data_url: str) -> dict[str, Any]:
    """Return the node fields to set once an upload has been decoded.

    Text nodes get the decoded body as ``content``; image and pdf nodes keep
    the data URL as ``url``; other kinds get nothing.

    Raises:
        NodeValidationError: If the payload cannot be decoded.
    """
    if kind == "text":
        _, body = decode_data_url(data_url)
        return {"content": body.decode("utf-8", errors="replace")}
    if kind in ("image", "pdf"):
        decode_data_url(data_url)
        return {"url": data_url}
    return {}
