"""日志与 APM 初始化

structlog 与标准库 logging 共用一套处理器链，uvicorn / aiosqlite 的日志也经由
ProcessorFormatter 统一渲染。请求级字段（request_id、user_id、task_id）
由中间件与鉴权依赖绑定到 contextvars，在此合并进每条日志。
"""

import logging

import structlog
from fastapi import FastAPI
from taskcoin.core.config import get_log_format, get_log_level, is_logfire_enabled

# 请求日志由 LoggingMiddleware 输出，uvicorn 自带的访问日志只会重复
_QUIET_LOGGERS = ("uvicorn.access", "aiosqlite")

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

# 始终传入同一个列表对象：cache_logger_on_first_use 下已缓存的 logger 持有该列表引用
_STRUCTLOG_PROCESSORS: list[structlog.types.Processor] = [
    *_SHARED_PROCESSORS,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging() -> None:
    """按 TASKCOIN_LOG_FORMAT / TASKCOIN_LOG_LEVEL 配置 structlog 与标准库 logging"""
    structlog.configure(
        processors=_STRUCTLOG_PROCESSORS,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(get_log_format()),
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, get_log_level(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logfire(app: FastAPI) -> bool:
    """按 LOGFIRE_SEND_TO_LOGFIRE 为应用接入 Logfire APM

    未安装 apm extra 或配置无效时降级为纯本地日志。

    Returns:
        True 如果 Logfire 已接入
    """
    if not is_logfire_enabled():
        return False

    log = structlog.get_logger()
    try:
        import logfire
    except ImportError:
        log.warning("logfire_unavailable", reason="logfire 未安装，请安装 apm extra")
        return False

    try:
        logfire.configure()
    except ValueError as e:
        # LogfireConfigError 继承自 ValueError
        log.warning("logfire_config_invalid", error=str(e))
        return False

    logfire.instrument_fastapi(app)
    log.info("logfire_enabled")
    return True
