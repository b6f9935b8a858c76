from . import (
    canon,
    types,
    exceptions,
    config,
    utils,
    validate,
    ingest,
    classify,
    rates,
    pricing,
    transform,
    demand,
    billing,
    summary,
)

__all__ = [
    "canon",
    "types",
    "exceptions",
    "config",
    "utils",
    "validate",
    "ingest",
    "classify",
    "rates",
    "pricing",
    "transform",
    "demand",
    "billing",
    "summary",
]
