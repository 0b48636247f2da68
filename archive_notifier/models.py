"""Data models for archive records and chat messages."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Record:
    """Represents one entry of the archive data file."""
    name: Optional[str] = None
    description: Optional[str] = None
    external_link: Optional[str] = None   # path under the replay site, e.g. "/archive/123"
    thumbnail_image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            external_link=data.get("external_link"),
            thumbnail_image_url=data.get("thumbnail_image_url"),
        )

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else "Unknown"


@dataclass
class MessageSegment:
    """One typed unit of a chat message."""
    type: str   # "text" or "image"
    data: Dict[str, str]

    @classmethod
    def text(cls, text: str) -> "MessageSegment":
        return cls(type="text", data={"text": text})

    @classmethod
    def image(cls, file: str) -> "MessageSegment":
        """`file` is a "base64://..." string."""
        return cls(type="image", data={"file": file})

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "data": dict(self.data)}


@dataclass
class NotificationPayload:
    """Ordered message segments sent for a single record."""
    segments: List[MessageSegment] = field(default_factory=list)

    def to_message(self) -> List[Dict[str, Any]]:
        return [segment.to_dict() for segment in self.segments]

    def preview(self) -> List[Dict[str, Any]]:
        """Like to_message(), but with image data abbreviated for logging."""
        preview = []
        for segment in self.to_message():
            if segment["type"] == "image":
                file = segment["data"].get("file", "")
                segment = {"type": "image", "data": {"file": f"<{len(file)} chars>"}}
            preview.append(segment)
        return preview
