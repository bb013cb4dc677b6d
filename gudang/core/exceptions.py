from __future__ import annotations

from gudang.core.codes import ErrorCode


class BusinessError(Exception):
    def __init__(self, code: ErrorCode, **kwargs: str) -> None:
        super().__init__(code.name)
        self.code = code
        self.kwargs = kwargs
