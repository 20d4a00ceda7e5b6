"""Refresh and error policies of the user list, one entry per write.

Kept as named constants so the behaviour after each write is a deliberate,
testable choice rather than something that differs by accident.
"""
from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from useradmin.core.config import Settings, get_settings

WriteOperation = Literal["create", "edit", "delete"]


class RefreshPolicy(str, enum.Enum):
    REFETCH = "refetch"  # re-run the list read; server assigns ids and side effects
    PATCH = "patch"      # replace the matching entry from the write's response


class ErrorPolicy(str, enum.Enum):
    RECORD = "record"  # failure becomes the page error
    IGNORE = "ignore"  # failure is logged and kept on the operation state only


REFRESH_POLICY: Mapping[str, RefreshPolicy] = MappingProxyType({
    "create": RefreshPolicy.REFETCH,
    "edit": RefreshPolicy.PATCH,
    "delete": RefreshPolicy.REFETCH,
})

# Edit is configurable through EDIT_ERROR_POLICY.
FIXED_ERROR_POLICY: Mapping[str, ErrorPolicy] = MappingProxyType({
    "create": ErrorPolicy.RECORD,
    "delete": ErrorPolicy.RECORD,
})


def error_policy_for(operation: WriteOperation, settings: Optional[Settings] = None) -> ErrorPolicy:
    if operation in FIXED_ERROR_POLICY:
        return FIXED_ERROR_POLICY[operation]
    settings = settings or get_settings()
    return ErrorPolicy(settings.edit_error_policy)


__all__ = [
    "WriteOperation",
    "RefreshPolicy",
    "ErrorPolicy",
    "REFRESH_POLICY",
    "FIXED_ERROR_POLICY",
    "error_policy_for",
]
