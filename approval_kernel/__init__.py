"""
Approval Kernel

Pure building blocks for staged expense approval:
- Immutable expense requests
- Injectable decision checks
- Decision outcomes (approved / rejected with reason)
- Pluggable progress reporting
- Typed exceptions and structured logging
"""

__version__ = "0.1.0"
