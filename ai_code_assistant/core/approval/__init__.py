"""Human-in-the-loop approval helpers."""

from .policy import READ_CATEGORY, SHELL_CATEGORY, WRITE_CATEGORY, ApprovalPolicy

__all__ = ["ApprovalPolicy", "READ_CATEGORY", "SHELL_CATEGORY", "WRITE_CATEGORY"]
