from __future__ import annotations

from gudang.pagination.controller import FetchFunction, PaginatedDataController
from gudang.pagination.models import ControllerState, PageInfo, PageParams
from gudang.pagination.normalizer import (
    NormalizedPage,
    ResponseShape,
    classify_response,
    normalize_response,
)

__all__ = [
    "ControllerState",
    "FetchFunction",
    "NormalizedPage",
    "PageInfo",
    "PageParams",
    "PaginatedDataController",
    "ResponseShape",
    "classify_response",
    "normalize_response",
]
