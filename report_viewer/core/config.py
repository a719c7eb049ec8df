"""
配置管理 - 使用Pydantic Settings实现环境变量管理
报告位置、调色板大小等均通过环境变量或 .env 文件配置
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类 - 所有配置项通过环境变量管理"""

    # API配置
    api_v1_prefix: str = Field(default="/api/v1", description="API路由前缀")
    project_name: str = Field(default="Comparison Report Viewer", description="项目名称")
    version: str = Field(default="1.0.0", description="版本号")

    # 服务配置
    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=8000, description="监听端口")

    # 报告配置
    report_path: str = Field(default="report", description="报告目录或zip文件路径")
    # 每个匹配最多有6个相邻匹配, 7种颜色时着色总能成功
    match_color_count: int = Field(default=7, ge=1, description="匹配高亮可用的颜色数量")

    # 日志配置
    log_level: str = Field(default="INFO", description="日志级别")
    json_logs: bool = Field(default=True, description="是否输出JSON格式日志")
    log_file: Optional[str] = Field(default=None, description="日志文件路径（可选）")

    # CORS 配置
    # 以逗号分隔的允许来源列表，例如："http://localhost:5173,https://your.app"
    cors_allow_origins: str = Field(default="http://localhost:5173", description="允许的跨域来源，逗号分隔")
    cors_allow_credentials: bool = Field(default=False, description="是否允许携带凭据")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # 忽略未定义的环境变量
    )

    @property
    def is_archive_report(self) -> bool:
        """报告是否为zip归档"""
        return self.report_path.lower().endswith(".zip")

    def get_cors_origins(self) -> list[str]:
        """返回允许的 CORS 来源列表"""
        raw = (self.cors_allow_origins or "").strip()
        if not raw:
            return ["*"]
        # 拆分并清理空白
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置单例
    使用lru_cache确保全局只有一个Settings实例
    """
    return Settings()
