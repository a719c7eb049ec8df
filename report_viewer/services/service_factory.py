"""
服务工厂 - 统一的服务创建和管理
"""
from typing import TYPE_CHECKING

# 避免循环导入，使用TYPE_CHECKING
if TYPE_CHECKING:
    from report_viewer.services.comparison_service import ComparisonService


class ServiceFactory:
    """
    服务工厂 - 提供统一的服务访问接口

    所有服务都使用单例模式
    """

    @staticmethod
    def get_comparison_service() -> 'ComparisonService':
        """获取对比服务"""
        from report_viewer.services.comparison_service import ComparisonService
        return ComparisonService()
