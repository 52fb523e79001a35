from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Optional

from gqlext.core.observability.metrics import inc_extension

from .config import ExtensionRunConfig
from .contracts import SchemaExtensionContext, SchemaExtensionHandler
from .registry import SchemaExtensionRegistry

_log = logging.getLogger("gqlext.extensions.dispatch")


class SchemaExtensionDispatcher:
    """
    Runs registered handlers over a document in registration order.

    Enrichment is best effort: a handler that raises is logged and skipped,
    the remaining handlers still run.
    """

    def __init__(self, registry: SchemaExtensionRegistry, cfg: Optional[ExtensionRunConfig] = None):
        self.registry = registry
        self.cfg = cfg or ExtensionRunConfig()

    def handlers(self) -> List[SchemaExtensionHandler]:
        return [h for h in self.registry.list() if self.cfg.is_enabled(h.name)]

    def apply_doc(self, doc: Mapping[str, Any], ctx: SchemaExtensionContext) -> None:
        for handler in self.handlers():
            self._invoke(handler, "doc", handler.apply_doc, doc, ctx)

    def apply_schema(self, schema_name: str, raw_schema: Mapping[str, Any], ctx: SchemaExtensionContext) -> None:
        for handler in self.handlers():
            self._invoke(handler, "schema", handler.apply_schema, schema_name, raw_schema, ctx)

    def apply_components(self, doc: Mapping[str, Any], ctx: Optional[SchemaExtensionContext]) -> Dict[str, str]:
        """
        Apply doc-level handlers, then schema-level handlers to every entry
        under components.schemas.

        Returns original schema name -> final ctx.schema_name for that schema.
        """
        if ctx is None:
            return {}

        t0 = time.perf_counter()
        self.apply_doc(doc, ctx)

        components = doc.get("components") if isinstance(doc, Mapping) else None
        schemas = components.get("schemas") if isinstance(components, Mapping) else None
        if not isinstance(schemas, Mapping):
            _log.debug("extensions.apply_components no components.schemas; doc-level only")
            return {}

        names: Dict[str, str] = {}
        for schema_name, raw_schema in schemas.items():
            if not isinstance(raw_schema, Mapping):
                continue
            ctx.schema_name = schema_name
            self.apply_schema(schema_name, raw_schema, ctx)
            names[schema_name] = ctx.schema_name

        _log.debug(
            "extensions.apply_components schemas=%s renamed=%s total_ms=%s",
            len(names),
            sum(1 for k, v in names.items() if k != v),
            int(round((time.perf_counter() - t0) * 1000)),
        )
        return names

    def _invoke(self, handler: SchemaExtensionHandler, scope: str, fn, *args: Any) -> None:
        try:
            fn(*args)
        except Exception as e:
            _log.warning("extensions.%s handler=%s failed: %s", scope, handler.name, e)
            inc_extension(handler.name, scope, "error")
            return
        inc_extension(handler.name, scope, "ok")
