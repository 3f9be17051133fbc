"""Uniform response envelopes returned by the API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_SUCCESS_MESSAGE = "操作成功"


@dataclass
class UnifiedResponse:
    """The envelope every API call returns."""

    success: bool
    code: int
    message: str
    data: Any = None
    details: Any = None
    trace_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; empty details and trace_id are left out."""
        result: dict[str, Any] = {
            "success": self.success,
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }
        if self.details is not None:
            result["details"] = self.details
        if self.trace_id:
            result["trace_id"] = self.trace_id
        return result


@dataclass
class ApiError:
    """A more detailed description of an error."""

    code: int
    message: str
    details: Any = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            result["details"] = self.details
        return result


def success(data: Any, message: Optional[str] = None) -> UnifiedResponse:
    """Build a successful response with code 0."""
    return UnifiedResponse(
        success=True,
        code=0,
        message=DEFAULT_SUCCESS_MESSAGE if message is None else message,
        data=data,
    )


def fail(code: int, message: str, *args: Any) -> UnifiedResponse:
    """Build a failed response; the first extra argument, if any, is the details.

    Details that are None or an empty list are not recorded.
    """
    response = UnifiedResponse(success=False, code=code, message=message)
    if args:
        detail = args[0]
        if isinstance(detail, list) and not detail:
            pass
        elif detail is not None:
            response.details = detail
    return response