# src/storage/node_store.py

"""Local stand-in for the host's data layer.

Implements the three node actions a source plugin receives from its host
(``create_node``, ``create_node_id`` and ``create_content_digest``) and
can dump everything it collected to a timestamped JSON file.
"""

import hashlib
import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.node import Node

logger = logging.getLogger("ml_source.storage")


class NodeStore:
    """In-memory node registry with deterministic identity helpers."""

    def __init__(self, namespace: str | None = None) -> None:
        self.results_dir: Path = Settings.RESULTS_DIR
        self._namespace = uuid.uuid5(
            uuid.NAMESPACE_DNS, namespace or Settings.NODE_NAMESPACE
        )
        self.nodes: dict[str, Node] = {}

    # ── Host actions ─────────────────────────────────────

    def create_node_id(self, seed: str) -> str:
        """Derive a stable node id from a seed string."""
        return str(uuid.uuid5(self._namespace, seed))

    @staticmethod
    def create_content_digest(content: Any) -> str:
        """MD5 of the canonical JSON form of *content*."""
        if not isinstance(content, str):
            content = json.dumps(
                content, sort_keys=True, ensure_ascii=False, default=str
            )
        return hashlib.md5(content.encode("utf-8")).hexdigest()

    def create_node(self, node: Node) -> None:
        """Register (or replace) a node."""
        if node.id in self.nodes:
            logger.debug("Replacing node %s (%s)", node.id, node.type)
        self.nodes[node.id] = node

    # ── Queries ──────────────────────────────────────────

    def nodes_of_type(self, node_type: str) -> list[Node]:
        return [n for n in self.nodes.values() if n.type == node_type]

    def __len__(self) -> int:
        return len(self.nodes)

    # ── Persistence ──────────────────────────────────────

    def save(self, label: str) -> Path:
        """Write every node to a timestamped JSON file and return its path."""
        self.results_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.results_dir / f"nodes_{label}_{timestamp}.json"

        data = [
            node.to_dict()
            for node in sorted(
                self.nodes.values(), key=lambda n: (n.type, n.id)
            )
        ]
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info("Saved %d nodes to %s", len(data), filepath)
        return filepath
