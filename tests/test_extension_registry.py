import concurrent.futures
from dataclasses import dataclass

from gqlext.core.extensions.registry import SchemaExtensionRegistry, default_registry


@dataclass
class NoopHandler:
    name: str

    def apply_doc(self, doc, ctx):
        return None

    def apply_schema(self, schema_name, raw_schema, ctx):
        return None


def test_empty_registry_lists_nothing(registry):
    assert registry.list() == []
    assert len(registry) == 0


def test_list_preserves_registration_order(registry):
    for n in ("b", "a", "c"):
        registry.register(NoopHandler(n))

    assert [h.name for h in registry.list()] == ["b", "a", "c"]


def test_list_returns_independent_copy(registry):
    registry.register(NoopHandler("a"))

    out = registry.list()
    out.append(NoopHandler("injected"))
    out.clear()

    assert [h.name for h in registry.list()] == ["a"]


def test_invalid_handlers_are_dropped(registry):
    registry.register(None)
    registry.register(NoopHandler(""))
    registry.register(NoopHandler("   "))
    registry.register(object())

    assert registry.list() == []


def test_duplicate_names_are_kept(registry):
    registry.register(NoopHandler("x-cms"))
    registry.register(NoopHandler("x-cms"))

    assert len(registry) == 2


def test_concurrent_registration_loses_nothing():
    reg = SchemaExtensionRegistry()

    def register(i: int):
        reg.register(NoopHandler(f"handler_{i}"))

    with concurrent.futures.ThreadPoolExecutor(max_workers=16) as pool:
        futs = [pool.submit(register, i) for i in range(64)]
        for f in concurrent.futures.as_completed(futs):
            f.result()

    names = {h.name for h in reg.list()}
    assert len(reg) == 64
    assert names == {f"handler_{i}" for i in range(64)}


def test_fingerprint_tracks_registration_sequence():
    def build(*names):
        reg = SchemaExtensionRegistry()
        for n in names:
            reg.register(NoopHandler(n))
        return reg

    assert build("a", "b").fingerprint() == build("a", "b").fingerprint()
    assert build("a", "b").fingerprint() != build("b", "a").fingerprint()
    assert build("a").fingerprint() != build("a", "b").fingerprint()


def test_default_registry_has_builtin_handlers():
    reg = default_registry()
    assert [h.name for h in reg.list()] == ["x-cms"]


def test_default_registry_returns_fresh_values():
    a = default_registry()
    b = default_registry()
    a.register(NoopHandler("extra"))

    assert len(a) == 2
    assert len(b) == 1
