# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Error carrier shared by every rater component."""

from enum import Enum
from typing import Any

from beartype import beartype


class RaterErrorCode(str, Enum):
    """Classification of rater failures."""

    INVALID_CONDITION = "INVALID_CONDITION"
    INVALID_FACTOR = "INVALID_FACTOR"
    INVALID_GROUP = "INVALID_GROUP"
    EVALUATION_FAILED = "EVALUATION_FAILED"
    CALCULATION_FAILED = "CALCULATION_FAILED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNKNOWN = "UNKNOWN"


class RaterError(Exception):
    """Rater specific errors."""

    def __init__(
        self,
        message: str,
        code: RaterErrorCode = RaterErrorCode.UNKNOWN,
        *,
        factor_id: str | None = None,
        group_id: str | None = None,
        field: str | None = None,
    ) -> None:
        """Initialize rater error."""
        self.message = message
        self.code = code
        self.factor_id = factor_id
        self.group_id = group_id
        self.field = field
        super().__init__(message)

    @beartype
    def to_dict(self) -> dict[str, Any]:
        """Convert to a serializable error payload."""
        data: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.factor_id is not None:
            data["factor_id"] = self.factor_id
        if self.group_id is not None:
            data["group_id"] = self.group_id
        if self.field is not None:
            data["field"] = self.field
        return data


@beartype
def is_rater_error(error: object) -> bool:
    """Check if ``error`` is a rater error."""
    return isinstance(error, RaterError)
