from __future__ import annotations

from typing import Any, Dict

from fastapi import status


class InventoryError(Exception):
    """
    Base class for errors the API maps to a JSON error response.

    Subclasses set `status_code`; `to_body()` shapes the payload.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class DuplicateSkuError(InventoryError):
    status_code = status.HTTP_409_CONFLICT
    code = "SKU_DUPLICATE"

    def __init__(self, sku: str) -> None:
        super().__init__("SKU already exists")
        self.sku = sku

    def to_body(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": {"sku": self.sku}}
