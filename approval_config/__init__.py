"""
approval_config: single public entrypoint for approval chain configuration.

Responsibility:
    Provides ``get_chain()``, the way callers obtain a built approval chain
    from configuration.  Either a YAML chain definition file or the
    built-in standard definition (Supervisor -> Manager -> Director -> CEO)
    is validated and assembled into linked approvers.

Architecture position:
    Configuration -- sits above ``approval_kernel`` and ``approval_engines``.
    The engines MUST NEVER import from ``approval_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested YAML file does not exist.
    - ``ChainConfigError`` -- the definition failed validation.

Audit relevance:
    Every successful ``get_chain()`` call emits an ``APPROVAL_CONFIG_TRACE``
    log entry with the definition name, version, checksum and tier names.
"""

from __future__ import annotations

import logging
from pathlib import Path

from approval_config.bridges import STANDARD_DEFINITION, tiers_from_definition
from approval_config.loader import compute_checksum, load_chain_definition
from approval_config.schema import ChainDefinition, TierDef
from approval_config.validator import ChainValidationResult, validate_chain_definition
from approval_engines.approvers import Approver
from approval_engines.chain import build_standard_chain
from approval_kernel.domain.checks import CheckSet
from approval_kernel.exceptions import ChainConfigError
from approval_kernel.reporting import ApprovalReporter

_logger = logging.getLogger("approval_kernel.config")

__all__ = [
    "ChainDefinition",
    "ChainValidationResult",
    "STANDARD_DEFINITION",
    "TierDef",
    "assemble_chain",
    "get_chain",
    "load_chain_definition",
    "validate_chain_definition",
]


def assemble_chain(
    definition: ChainDefinition,
    *,
    checks: CheckSet | None = None,
    reporter: ApprovalReporter | None = None,
) -> Approver:
    """Validate ``definition`` and build its chain.

    Raises:
        ChainConfigError: if validation reports any error.
    """
    result = validate_chain_definition(definition)
    for warning in result.warnings:
        _logger.warning("approval_config_warning", extra={"detail": warning})
    if not result.is_valid:
        raise ChainConfigError(definition.name, result.errors)

    head = build_standard_chain(
        checks=checks,
        reporter=reporter,
        tiers=tiers_from_definition(definition),
    )
    _logger.info(
        "APPROVAL_CONFIG_TRACE",
        extra={
            "trace_type": "APPROVAL_CONFIG_TRACE",
            "definition_name": definition.name,
            "definition_version": definition.version,
            "checksum": compute_checksum(definition),
            "tiers": [t.name for t in definition.tiers],
        },
    )
    return head


def get_chain(
    path: Path | str | None = None,
    *,
    checks: CheckSet | None = None,
    reporter: ApprovalReporter | None = None,
) -> Approver:
    """
    Build an approval chain from configuration.

    Args:
        path: YAML chain definition file.  ``None`` uses the built-in
            standard definition.
        checks: Decision checks given to every approver.
        reporter: Reporter given to every approver.

    Returns:
        The head approver of the built (sealed) chain.
    """
    definition = STANDARD_DEFINITION if path is None else load_chain_definition(Path(path))
    return assemble_chain(definition, checks=checks, reporter=reporter)
