from __future__ import annotations

from typing import Any

from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(
    data: Any = None,
    *,
    message: str | None = None,
    status: int = http_status.HTTP_200_OK,
    **extra: Any,
) -> Response:
    """
    Success envelope: {success: true, message?, data?, ...extra}.
    """
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return Response(body, status=status)
