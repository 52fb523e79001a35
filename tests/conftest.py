import pytest

from gqlext.core.extensions.contracts import SchemaExtensionContext
from gqlext.core.extensions.registry import SchemaExtensionRegistry
from gqlext.plugins.extensions.cms import CmsExtension


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    # Keep config resolution deterministic unless a test sets it explicitly
    monkeypatch.delenv("GQLEXT_EXTENSIONS_FILE", raising=False)


@pytest.fixture()
def registry():
    return SchemaExtensionRegistry()


@pytest.fixture()
def cms():
    return CmsExtension()


@pytest.fixture()
def ctx():
    return SchemaExtensionContext()


@pytest.fixture()
def cms_document():
    """
    OpenAPI-shaped document with a doc-level and two schema-level x-cms blocks.
    """
    return {
        "x-cms": {"content_type": "page", "version": "3"},
        "components": {
            "schemas": {
                "Article": {
                    "type": "object",
                    "x-cms": {"contentType": "article", "schemaVersion": "2"},
                },
                "Author": {
                    "type": "object",
                    "x-cms": {"schema": "author@v7"},
                },
                "Plain": {"type": "object"},
            }
        },
    }
