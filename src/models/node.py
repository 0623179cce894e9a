# src/models/node.py

"""Content node model handed to the host data layer."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Node:
    """A content-addressed record indexed by the host."""

    id: str
    type: str
    fields: dict[str, Any]
    content_digest: str
    parent: str | None = None
    children: list[str] = field(default_factory=lambda: list[str]())

    def to_dict(self) -> dict[str, Any]:
        """Serialise in the host's node layout (fields + ``internal``)."""
        return {
            **self.fields,
            "id": self.id,
            "parent": self.parent,
            "children": list(self.children),
            "internal": {
                "type": self.type,
                "contentDigest": self.content_digest,
            },
        }
