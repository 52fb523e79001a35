from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from gqlext.core.extensions.contracts import SchemaExtensionContext

EXTENSION_KEY = "x-cms"

CONTENT_TYPE_KEYS = ("content_type", "contentType", "contentTypeSlug", "slug")
SCHEMA_KEYS = ("schema", "schema_version", "schemaVersion")
VERSION_KEYS = ("version", "schema_version", "schemaVersion")

_SEMVER_LIKE = re.compile(r"[0-9]+(\.[0-9]+){0,2}")


@dataclass(frozen=True)
class CmsMetadata:
    content_type: str = ""
    schema: str = ""
    version: str = ""

    @classmethod
    def from_block(cls, raw: Mapping[str, Any]) -> "CmsMetadata":
        return cls(
            content_type=first_string(raw, *CONTENT_TYPE_KEYS),
            schema=first_string(raw, *SCHEMA_KEYS),
            version=first_string(raw, *VERSION_KEYS),
        )


def first_string(raw: Mapping[str, Any], *keys: str) -> str:
    """Return the first non-blank value among `keys`, trimmed; "" if none."""
    for key in keys:
        if key not in raw:
            continue
        s = _as_text(raw[key]).strip()
        if s:
            return s
    return ""


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    # str() uses the value's own __str__ when defined, repr otherwise
    return str(value)


def _float_text(value: float) -> str:
    """
    Shortest float text in %g style: "2" for 2.0, "1.5", "1e+06", "1e-05".
    Exponent form once the decimal exponent is below -4 or at least 6.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    d = Decimal(repr(value)).normalize()
    exp = d.adjusted()
    if -4 <= exp < 6:
        return format(d, "f")

    sign, digits, _ = d.as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(x) for x in digits[1:])
    return f"{'-' if sign else ''}{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp):02d}"


def is_semver_like(value: str) -> bool:
    return _SEMVER_LIKE.fullmatch(value.strip()) is not None


def resolve_schema_identifier(meta: CmsMetadata) -> str:
    """
    Compute the versioned identifier for a CMS-backed schema.

    Decision order:
      1) schema already qualified ("...@...")   -> schema
      2) schema is a "v"-prefixed version        -> "<content_type>@<schema>"
      3) schema is semver-like ("2", "1.4")      -> "<content_type>@v<schema>"
      4) any other schema                        -> schema
      5) no schema, content_type + version       -> "<content_type>@v<version>"
      6) nothing usable                          -> ""
    """
    schema = meta.schema
    content_type = meta.content_type

    if schema:
        if "@" in schema:
            return schema
        if content_type and schema.lower().startswith("v"):
            return f"{content_type}@{schema}"
        if content_type and is_semver_like(schema):
            return f"{content_type}@v{schema}"
        return schema

    if content_type and meta.version:
        version = meta.version
        if not version.lower().startswith("v"):
            version = "v" + version
        return f"{content_type}@{version}"

    return ""


def _extension_block(raw: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(raw, Mapping) or not raw:
        return None
    block = raw.get(EXTENSION_KEY)
    if not isinstance(block, Mapping):
        return None
    return block


@dataclass
class CmsExtension:
    name: str = EXTENSION_KEY
    version: str = "0.1.0"

    def apply_doc(self, doc: Mapping[str, Any], ctx: Optional[SchemaExtensionContext]) -> None:
        if ctx is None:
            return
        block = _extension_block(doc)
        if block is None:
            return

        meta = CmsMetadata.from_block(block)
        if not meta.content_type:
            return

        resolved = resolve_schema_identifier(meta)
        if not resolved:
            return

        ctx.set_name(meta.content_type, resolved)

    def apply_schema(
        self,
        schema_name: str,
        raw_schema: Mapping[str, Any],
        ctx: Optional[SchemaExtensionContext],
    ) -> None:
        if ctx is None:
            return
        block = _extension_block(raw_schema)
        if block is None:
            return

        meta = CmsMetadata.from_block(block)
        if not meta.content_type:
            meta = CmsMetadata(content_type=schema_name, schema=meta.schema, version=meta.version)

        resolved = resolve_schema_identifier(meta)
        if not resolved:
            return

        ctx.set_name(schema_name, resolved)
        ctx.schema_name = resolved


HANDLER = CmsExtension()
