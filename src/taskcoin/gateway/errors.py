"""业务异常 -> HTTP 错误响应

响应体统一为 {"error": {"code": ..., "message": ...}}。
错误码写入 request.state.error_code，由 LoggingMiddleware 随 request_completed 输出。
"""

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse
from taskcoin.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InsufficientFundsError,
    InvalidRewardError,
    InvalidStateError,
    NotFoundError,
    TaskCoinError,
)

# 按异常类别映射状态码（子类按 MRO 匹配）
_STATUS_BY_KIND: list[tuple[type[TaskCoinError], int]] = [
    (NotFoundError, 404),
    (InvalidStateError, 409),
    (ConflictError, 409),
    (ForbiddenError, 403),
    (InsufficientFundsError, 400),
    (InvalidRewardError, 422),
    (AuthenticationError, 401),
]


def status_code_for(error: TaskCoinError) -> int:
    for kind, status_code in _STATUS_BY_KIND:
        if isinstance(error, kind):
            return status_code
    return 400


async def taskcoin_error_handler(request: Request, exc: TaskCoinError) -> JSONResponse:
    status_code = status_code_for(exc)
    request.state.error_code = exc.code
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskCoinError, taskcoin_error_handler)
