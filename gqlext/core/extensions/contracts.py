from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol


@dataclass
class SchemaExtensionContext:
    """
    Mutable naming state for one document.

    Owned by the caller and passed by reference to every handler call.
    Handlers write resolved identifiers into it; the generator reads them back.
    """
    doc: Optional[Mapping[str, Any]] = None
    schema_name: str = ""
    meta: Any = None  # caller-owned, never touched by handlers
    name_map: Optional[Dict[str, str]] = None  # created on first write

    def set_name(self, original: str, resolved: str) -> None:
        if self.name_map is None:
            self.name_map = {}
        self.name_map[original] = resolved

    def resolved_name(self, name: str) -> str:
        if not self.name_map:
            return name
        return self.name_map.get(name, name)


class SchemaExtensionHandler(Protocol):
    """
    Minimal stable contract for schema extension handlers.
    `name` must be non-blank or the registry drops the handler.
    """
    name: str

    def apply_doc(self, doc: Mapping[str, Any], ctx: Optional[SchemaExtensionContext]) -> None:
        ...

    def apply_schema(
        self,
        schema_name: str,
        raw_schema: Mapping[str, Any],
        ctx: Optional[SchemaExtensionContext],
    ) -> None:
        ...
