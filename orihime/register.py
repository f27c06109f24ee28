"""Registration entrypoint for the Orihime Pants backend."""

from __future__ import annotations

from orihime import rules as orihime_rules
from orihime.target_types import OrihimeBinary


def target_types() -> list[type]:
    return [
        OrihimeBinary,
    ]


def rules() -> list:
    return [
        *orihime_rules.rules(),
    ]
