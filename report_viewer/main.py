from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from report_viewer.api.v1 import comparisons, health
from report_viewer.core.config import get_settings
from report_viewer.core.errors import BaseApplicationError
from report_viewer.core.logging import LogEvent, configure_logging, get_logger
from report_viewer.core.middleware import error_handler

settings = get_settings()
configure_logging(level=settings.log_level, json_logs=settings.json_logs, log_file=settings.log_file)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info(
        LogEvent.APP_STARTED,
        version=settings.version,
        report_path=settings.report_path,
        palette_size=settings.match_color_count,
        api_prefix=settings.api_v1_prefix,
    )
    try:
        yield
    finally:
        logger.info(LogEvent.APP_STOPPED)


app = FastAPI(
    title=settings.project_name,
    version=settings.version,
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# 中间件配置 - 安全的 CORS 设置
origins = settings.get_cors_origins()
# 浏览器规范：当 allow_origins 为 "*" 时，不能允许 credentials
allow_credentials = settings.cors_allow_credentials and origins != ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# 错误处理
app.add_exception_handler(BaseApplicationError, error_handler)
app.add_exception_handler(Exception, error_handler)

# 路由注册
app.include_router(
    health.router,
    prefix=f"{settings.api_v1_prefix}/health",
    tags=["health"]
)
app.include_router(
    comparisons.router,
    prefix=f"{settings.api_v1_prefix}/comparisons",
)


@app.get("/")
async def root():
    """根路径"""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs",
        "api_prefix": settings.api_v1_prefix,
    }

