"""
Chain Definition Loader (``approval_config.loader``).

Responsibility
--------------
Loads YAML chain definition files and parses them into typed
``approval_config.schema`` dataclass instances.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  definition identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Wrong shapes (document or tier not a mapping, tiers or checks not a
  list) -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from approval_config.schema import ChainDefinition, TierDef


def load_yaml_file(path: Path) -> Any:
    """
    Load a single YAML file and return its parsed contents.

    An empty file yields ``{}``.  The top level is not checked here;
    ``parse_chain_definition`` rejects anything but a mapping.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_tier(data: Any) -> TierDef:
    """Parse a TierDef from a dict; ``limit`` is kept as text."""
    if not isinstance(data, dict):
        raise ValueError(f"Tier must be a mapping, got {data!r}")
    limit = data.get("limit")
    checks = data.get("checks", [])
    if not isinstance(checks, (list, tuple)):
        raise ValueError(f"Tier '{data.get('name')}': checks must be a list, got {checks!r}")
    return TierDef(
        name=str(data["name"]),
        limit=None if limit is None else str(limit),
        checks=tuple(str(c) for c in checks),
    )


def parse_chain_definition(data: Any) -> ChainDefinition:
    """
    Parse a ``ChainDefinition`` from a dict.

    Raises:
        KeyError: if ``name`` or a tier's ``name`` is missing.
        ValueError: if the document or a tier is not a mapping, or
            ``tiers`` is not a list.
    """
    if not isinstance(data, dict):
        raise ValueError(
            f"Chain definition must be a mapping, got {type(data).__name__}"
        )
    name = data.get("name")
    tiers_raw = data.get("tiers", [])
    if not isinstance(tiers_raw, list):
        raise ValueError(f"Chain '{name}': tiers must be a list")
    for position, entry in enumerate(tiers_raw, start=1):
        if not isinstance(entry, dict):
            raise ValueError(
                f"Chain '{name}': tier {position} must be a mapping, got {entry!r}"
            )
    return ChainDefinition(
        name=str(data["name"]),
        version=int(data.get("version", 1)),
        tiers=tuple(parse_tier(t) for t in tiers_raw),
        description=data.get("description", ""),
    )


def load_chain_definition(path: Path) -> ChainDefinition:
    """Load and parse a chain definition YAML file."""
    return parse_chain_definition(load_yaml_file(Path(path)))


def compute_checksum(definition: ChainDefinition) -> str:
    """Deterministic SHA-256 of the definition's canonical JSON form."""
    canonical = json.dumps(asdict(definition), sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
