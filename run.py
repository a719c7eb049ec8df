#!/usr/bin/env python
"""
快捷启动脚本 - 直接运行报告查看后端
使用方法: python run.py
报告位置和端口通过环境变量 REPORT_PATH / PORT 配置
"""
import socket
import sys
from pathlib import Path


def is_port_in_use(port: int) -> bool:
    """检查端口是否被占用"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind(("", port))
            return False
        except OSError:
            return True


if __name__ == "__main__":
    import uvicorn

    from report_viewer.core.config import get_settings

    settings = get_settings()

    if is_port_in_use(settings.port):
        print(f"❌ Port {settings.port} is already in use")
        print(f"Use a different port: PORT=8001 python {__file__}")
        sys.exit(1)

    if not Path(settings.report_path).exists():
        print(f"⚠️ Report not found at {settings.report_path}, comparison requests will fail")

    print("=" * 60)
    print("🚀 Comparison Report Viewer")
    print("=" * 60)
    print(f"📍 Server: http://{settings.host}:{settings.port}")
    print(f"📚 API Docs: http://localhost:{settings.port}/docs")
    print(f"📁 Report: {settings.report_path}")
    print("=" * 60)

    try:
        uvicorn.run(
            "report_viewer.main:app",
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        print("\n👋 Server stopped")
