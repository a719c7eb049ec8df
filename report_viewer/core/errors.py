"""
错误处理模块 - 定义自定义异常类和错误处理逻辑
清晰的错误分类和有意义的错误消息
"""
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status


class ErrorCode(str, Enum):
    """错误代码枚举"""
    # 客户端错误
    INVALID_INPUT = "INVALID_INPUT"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # 服务端错误
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # 业务逻辑错误
    NO_SIMILARITY_DATA = "NO_SIMILARITY_DATA"
    COLORING_INFEASIBLE = "COLORING_INFEASIBLE"


class BaseApplicationError(Exception):
    """应用基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


# 客户端错误 (4xx)
class InvalidInputError(BaseApplicationError):
    """输入验证错误"""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_INPUT,
            details=details,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )


class MalformedInputError(BaseApplicationError):
    """报告文件缺少必需字段或无法解析"""
    def __init__(self, message: str, source: Optional[str] = None, field: Optional[str] = None):
        details = {}
        if source:
            details["source"] = source
        if field:
            details["field"] = field

        super().__init__(
            message=f"Malformed input: {message}",
            error_code=ErrorCode.MALFORMED_INPUT,
            details=details,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )


class ResourceNotFoundError(BaseApplicationError):
    """资源不存在错误"""
    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        message = f"{resource_type} not found"
        details = {"resource_type": resource_type}
        if resource_id:
            details["resource_id"] = resource_id
            message = f"{resource_type} '{resource_id}' not found"

        super().__init__(
            message=message,
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            details=details,
            status_code=status.HTTP_404_NOT_FOUND
        )


class ComparisonNotFoundError(ResourceNotFoundError):
    """指定提交对没有对比文件"""
    def __init__(self, first_submission_id: str, second_submission_id: str):
        super().__init__("Comparison", f"{first_submission_id}/{second_submission_id}")


class ReportFileNotFoundError(ResourceNotFoundError):
    """报告中不存在该文件"""
    def __init__(self, path: str):
        super().__init__("Report file", path)


# 业务逻辑错误
class NoSimilarityDataError(BaseApplicationError):
    """对比文件中既没有相似度表也没有旧版单一相似度"""
    def __init__(self, source: Optional[str] = None):
        details = {}
        if source:
            details["source"] = source

        super().__init__(
            message="No similarities found in comparison file",
            error_code=ErrorCode.NO_SIMILARITY_DATA,
            details=details,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )


class ColoringInfeasibleError(BaseApplicationError):
    """调色板中所有颜色都被相邻匹配占用"""
    def __init__(self, palette_size: int, match_handle: int):
        super().__init__(
            message=f"No color of a palette of size {palette_size} can be assigned to match {match_handle}",
            error_code=ErrorCode.COLORING_INFEASIBLE,
            details={"palette_size": palette_size, "match_handle": match_handle},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        self.palette_size = palette_size
        self.match_handle = match_handle

