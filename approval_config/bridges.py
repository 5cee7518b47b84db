"""
Config-to-engine bridges (``approval_config.bridges``).

Translate between validated chain definitions and the tier types the
approval engines consume.  The engines never import this package.
"""

from __future__ import annotations

from approval_config.schema import ChainDefinition, TierDef
from approval_config.validator import parse_limit
from approval_engines.approvers import STANDARD_TIERS, TierDefinition
from approval_kernel.domain.checks import CheckName


def tiers_from_definition(definition: ChainDefinition) -> tuple[TierDefinition, ...]:
    """Convert a validated definition into engine tier definitions."""
    return tuple(
        TierDefinition(
            name=tier.name,
            limit=parse_limit(tier.limit),
            required_checks=tuple(CheckName(c) for c in tier.checks),
        )
        for tier in definition.tiers
    )


def definition_from_tiers(
    name: str,
    tiers: tuple[TierDefinition, ...],
    version: int = 1,
    description: str = "",
) -> ChainDefinition:
    return ChainDefinition(
        name=name,
        version=version,
        tiers=tuple(
            TierDef(
                name=t.name,
                limit=None if t.limit is None else str(t.limit),
                checks=tuple(c.value for c in t.required_checks),
            )
            for t in tiers
        ),
        description=description,
    )


STANDARD_DEFINITION = definition_from_tiers(
    "standard",
    STANDARD_TIERS,
    description="Supervisor -> Manager -> Director -> CEO",
)
