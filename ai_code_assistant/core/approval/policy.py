"""Approval policy deciding which tool calls may skip human confirmation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ai_code_assistant.core.utils.config import Settings

READ_CATEGORY = "file_read"
WRITE_CATEGORY = "file_write"
SHELL_CATEGORY = "command"


@dataclass
class ApprovalPolicy:
    """Auto-approval switches per tool category. Everything requires confirmation by default."""

    auto_approve_read: bool = False
    auto_approve_write: bool = False
    auto_approve_shell: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> ApprovalPolicy:
        return cls(
            auto_approve_read=settings.auto_approve_read,
            auto_approve_write=settings.auto_approve_write,
            auto_approve_shell=settings.auto_approve_shell,
        )

    @classmethod
    def approve_all(cls) -> ApprovalPolicy:
        return cls(auto_approve_read=True, auto_approve_write=True, auto_approve_shell=True)

    def allows(self, category: str | None) -> bool:
        if category == READ_CATEGORY:
            return self.auto_approve_read
        if category == WRITE_CATEGORY:
            return self.auto_approve_write
        if category == SHELL_CATEGORY:
            return self.auto_approve_shell
        return False


__all__ = ["ApprovalPolicy", "READ_CATEGORY", "SHELL_CATEGORY", "WRITE_CATEGORY"]
