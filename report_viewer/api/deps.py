from report_viewer.services import ServiceFactory
from report_viewer.services.comparison_service import ComparisonService


def get_comparison_service() -> ComparisonService:
    """获取对比服务单例"""
    return ServiceFactory.get_comparison_service()
