"""
结构化日志配置模块 - 使用structlog实现JSON格式日志
日志即文档，提供有意义的上下文
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor


def configure_logging(
    level: str = "INFO",
    json_logs: bool = True,
    log_file: Optional[str] = None
) -> None:
    """
    配置结构化日志系统

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: 是否输出JSON格式日志
        log_file: 日志文件路径（可选）
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # 根据环境选择渲染器
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger().setLevel(log_level)

    # 文件始终使用JSON格式
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)


def get_logger(
    name: str,
    **initial_context: Any
) -> FilteringBoundLogger:
    """
    获取结构化日志记录器

    Args:
        name: 日志记录器名称（通常使用模块名）
        **initial_context: 初始上下文数据
    """
    logger = structlog.get_logger(name)

    if initial_context:
        logger = logger.bind(**initial_context)

    return logger


class LogEvent:
    """标准化的日志事件类型"""

    # 应用生命周期
    APP_STARTED = "app_started"
    APP_STOPPED = "app_stopped"

    # 报告读取
    REPORT_OPENED = "report_opened"
    REPORT_FILE_MISSING = "report_file_missing"
    SUBMISSION_FILES_LOADED = "submission_files_loaded"
    SUBMISSION_FILES_FAILED = "submission_files_failed"

    # 对比构建
    COMPARISON_REQUESTED = "comparison_requested"
    COMPARISON_BUILT = "comparison_built"
    COMPARISON_CACHE_HIT = "comparison_cache_hit"
    LEGACY_SIMILARITY_FORMAT = "legacy_similarity_format"
    UNKNOWN_METRIC_SKIPPED = "unknown_metric_skipped"

    # 匹配着色
    COLORING_STARTED = "coloring_started"
    COLORING_COMPLETED = "coloring_completed"
    COLORING_FAILED = "coloring_failed"

    # API请求
    REQUEST_FAILED = "request_failed"
