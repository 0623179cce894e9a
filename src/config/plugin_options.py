# src/config/plugin_options.py

"""Plugin options handed over by the host (or the CLI)."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Keys the host injects into every plugin's options
_HOST_INJECTED_KEYS = ("plugins",)


@dataclass(frozen=True)
class PluginOptions:
    """The two options the source plugin needs to run."""

    site_id: str = ""
    username: str = ""

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "PluginOptions":
        """Build options from a raw host mapping, ignoring host-injected keys."""
        cleaned = {
            k: v for k, v in options.items()
            if k not in _HOST_INJECTED_KEYS
        }
        return cls(
            site_id=str(cleaned.get("site_id") or "").strip(),
            username=str(cleaned.get("username") or "").strip(),
        )

    def missing(self) -> list[str]:
        """Return the names of required options that are empty.

        ``username`` is reported first, matching the order in which the
        plugin warns about them.
        """
        absent: list[str] = []
        if not self.username:
            absent.append("username")
        if not self.site_id:
            absent.append("site_id")
        return absent
