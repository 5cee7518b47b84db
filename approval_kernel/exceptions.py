"""
Typed Exception Hierarchy for the Approval Kernel.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from ApprovalChainError:

    ApprovalChainError (base)
    |
    +-- InvalidRequestError
    |
    +-- ChainConstructionError
    |   +-- DuplicateApproverError
    |   +-- ChainCycleError
    |   +-- EmptyChainError
    |   +-- ChainSealedError
    |
    +-- ChainConfigError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                 | When Raised
----------------|----------------------|------------------------------------------
Request         | INVALID_REQUEST      | Missing field or negative/non-decimal amount
----------------|----------------------|------------------------------------------
Construction    | DUPLICATE_APPROVER   | Approver appended twice to the same chain
                | CHAIN_CYCLE          | Link would loop back into the chain
                | EMPTY_CHAIN          | build() with no approvers
                | CHAIN_SEALED         | append() after build()
----------------|----------------------|------------------------------------------
Config          | CHAIN_CONFIG         | Chain definition failed validation

A failed decision check or an exhausted chain is NOT an exception. Both are
ordinary rejected outcomes (see approval_kernel.domain.outcome).
"""


class ApprovalChainError(Exception):
    """
    Base exception for all approval kernel errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "APPROVAL_CHAIN_ERROR"


# Request exceptions


class InvalidRequestError(ApprovalChainError):
    """An expense request could not be constructed from the given values."""

    code: str = "INVALID_REQUEST"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid expense request field '{field}' ({value!r}): {reason}")


# Chain construction exceptions


class ChainConstructionError(ApprovalChainError):
    """Base exception for invalid chain topology, raised at build time."""

    code: str = "CHAIN_CONSTRUCTION"


class DuplicateApproverError(ChainConstructionError):
    """The approver is already a member of the chain being built."""

    code: str = "DUPLICATE_APPROVER"

    def __init__(self, approver_name: str):
        self.approver_name = approver_name
        super().__init__(f"Approver '{approver_name}' is already in the chain")


class ChainCycleError(ChainConstructionError):
    """
    Linking this approver would make the chain loop.

    The chain must stay acyclic: a request walking the successor links
    must always reach an approver with no successor.
    """

    code: str = "CHAIN_CYCLE"

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"Cycle detected in approval chain: {' -> '.join(path)}")


class EmptyChainError(ChainConstructionError):
    """build() was called before any approver was appended."""

    code: str = "EMPTY_CHAIN"

    def __init__(self):
        super().__init__("Cannot build an approval chain with no approvers")


class ChainSealedError(ChainConstructionError):
    """The chain was already built; its links are read-only."""

    code: str = "CHAIN_SEALED"

    def __init__(self, approver_name: str):
        self.approver_name = approver_name
        super().__init__(
            f"Cannot append '{approver_name}': chain has already been built"
        )


# Configuration exceptions


class ChainConfigError(ApprovalChainError):
    """A chain definition failed validation and cannot be assembled."""

    code: str = "CHAIN_CONFIG"

    def __init__(self, definition_name: str, errors: list[str]):
        self.definition_name = definition_name
        self.errors = errors
        super().__init__(
            f"Chain definition '{definition_name}' is invalid: {'; '.join(errors)}"
        )
