"""LoggingMiddleware

每个请求生成 ULID request_id，绑定到 structlog contextvars 并通过 X-Request-ID 返回。
请求结束时输出一条 request_completed，附带耗时，以及下游写入 request.state 的
调用者 user_id（鉴权依赖）和业务错误码（异常处理器）。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

log = structlog.get_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        # 下游与本中间件共享同一个 scope["state"]
        request.state.user_id = None
        request.state.error_code = None

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        fields: dict = {"status_code": response.status_code, "duration_ms": duration_ms}
        if request.state.user_id is not None:
            fields["user_id"] = request.state.user_id
        if request.state.error_code is not None:
            fields["error_code"] = request.state.error_code

        if response.status_code >= 500:
            await log.aerror("request_completed", **fields)
        elif response.status_code >= 400:
            await log.awarning("request_completed", **fields)
        else:
            await log.ainfo("request_completed", **fields)

        response.headers["X-Request-ID"] = request_id
        return response
