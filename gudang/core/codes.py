from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    INVALID_PARAMETER = 40000

    API_UNAUTHORIZED = 40100

    API_REQUEST_FAILED = 50200
    API_UNAVAILABLE = 50300
    API_INVALID_RESPONSE = 50201
