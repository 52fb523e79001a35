from .contracts import SchemaExtensionContext, SchemaExtensionHandler
from .registry import SchemaExtensionRegistry, default_registry

__all__ = [
    "SchemaExtensionContext",
    "SchemaExtensionHandler",
    "SchemaExtensionRegistry",
    "default_registry",
]
