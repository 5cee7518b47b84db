"""
Chain Definition Validator (``approval_config.validator``).

Responsibility
--------------
Validates a ``ChainDefinition`` before it is assembled into approvers, so
a bad configuration fails before any request is processed.

Invariants enforced
-------------------
* At least one tier; tier names are unique.
* Check names are known ``CheckName`` values.
* Limits parse as non-negative decimals and strictly ascend.
* Only the last tier may be unlimited.
* Each tier's checks start with every check of the tier below, in order.

Failure modes
-------------
* Validation errors (``ChainValidationResult.errors``)  -> the definition
  MUST NOT be assembled.
* Validation warnings  -> assembly proceeds; e.g. a chain that does not
  end with an unlimited tier rejects large amounts as
  "no approver available".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from approval_config.schema import ChainDefinition
from approval_kernel.domain.checks import CheckName

_KNOWN_CHECKS = frozenset(c.value for c in CheckName)


@dataclass
class ChainValidationResult:
    """
    Result of chain definition validation.

    Contract
    --------
    * ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def parse_limit(value: str | None) -> Decimal | None:
    """Convert a configured limit to Decimal; None stays unlimited."""
    if value is None:
        return None
    try:
        limit = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"not a decimal number: {value!r}") from None
    if not limit.is_finite() or limit < 0:
        raise ValueError(f"must be a finite, non-negative amount: {value!r}")
    return limit


def validate_chain_definition(definition: ChainDefinition) -> ChainValidationResult:
    """
    Validate a chain definition.

    Postconditions:
        - Returns a ``ChainValidationResult`` with errors and warnings.
        - A definition with errors MUST NOT be assembled.
    """
    result = ChainValidationResult()

    if not definition.tiers:
        result.add_error(f"Chain '{definition.name}' has no tiers")
        return result

    _validate_tier_names(definition, result)
    _validate_check_names(definition, result)
    _validate_limits(definition, result)
    _validate_check_monotonicity(definition, result)

    return result


def _validate_tier_names(
    definition: ChainDefinition, result: ChainValidationResult
) -> None:
    seen: set[str] = set()
    for tier in definition.tiers:
        if not tier.name.strip():
            result.add_error("Tier name must not be blank")
        elif tier.name in seen:
            result.add_error(f"Duplicate tier: '{tier.name}' appears more than once")
        seen.add(tier.name)


def _validate_check_names(
    definition: ChainDefinition, result: ChainValidationResult
) -> None:
    for tier in definition.tiers:
        for check in tier.checks:
            if check not in _KNOWN_CHECKS:
                result.add_error(f"Tier '{tier.name}': unknown check '{check}'")
        if len(set(tier.checks)) != len(tier.checks):
            result.add_error(f"Tier '{tier.name}': check listed more than once")


def _validate_limits(
    definition: ChainDefinition, result: ChainValidationResult
) -> None:
    """Limits must parse, ascend strictly, and only the last may be unlimited."""
    previous: Decimal | None = None
    last_index = len(definition.tiers) - 1
    for index, tier in enumerate(definition.tiers):
        try:
            limit = parse_limit(tier.limit)
        except ValueError as exc:
            result.add_error(f"Tier '{tier.name}': limit {exc}")
            continue

        if limit is None:
            if index != last_index:
                result.add_error(
                    f"Tier '{tier.name}': only the last tier may be unlimited"
                )
            continue

        if previous is not None and limit <= previous:
            result.add_error(
                f"Tier '{tier.name}': limit {limit} must exceed previous limit {previous}"
            )
        previous = limit

    if definition.tiers[-1].limit is not None:
        result.add_warning(
            f"Chain '{definition.name}' has no unlimited tier; amounts above "
            f"{definition.tiers[-1].limit} will be rejected"
        )


def _validate_check_monotonicity(
    definition: ChainDefinition, result: ChainValidationResult
) -> None:
    """Higher authority checks everything lower authority checks, plus more."""
    for lower, higher in zip(definition.tiers, definition.tiers[1:]):
        if higher.checks[: len(lower.checks)] != lower.checks:
            result.add_error(
                f"Tier '{higher.name}' must require all checks of "
                f"'{lower.name}' ({', '.join(lower.checks)}) first, in order"
            )
