from typing import Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """
    存活检查

    简单的存活探针，用于Kubernetes等容器编排工具
    """
    return {"status": "alive"}
