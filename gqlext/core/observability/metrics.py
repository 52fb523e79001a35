from __future__ import annotations

from prometheus_client import Counter

EXTENSION_APPLICATIONS_TOTAL = Counter(
    "gqlext_schema_extension_applications_total",
    "Schema extension handler invocations",
    ["handler", "scope", "outcome"],
)


def inc_extension(handler: str, scope: str, outcome: str) -> None:
    EXTENSION_APPLICATIONS_TOTAL.labels(handler=handler or "unknown", scope=scope, outcome=outcome).inc()
