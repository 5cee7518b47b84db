"""
Chain definition schema.

Defines the human-authored, reviewable source artifact for an approval
chain.  YAML files are parsed into these types by the loader, checked by
the validator, and turned into live approvers by the bridge.

Limits stay as strings here; they are converted to ``Decimal`` only after
validation.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TierDef:
    """One approver tier as written in configuration."""

    name: str
    limit: str | None  # None = unlimited
    checks: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChainDefinition:
    """An ordered list of tiers, lowest authority first."""

    name: str
    version: int = 1
    tiers: tuple[TierDef, ...] = ()
    description: str = ""
