"""
API 路由模块。
"""

from oceangrid.api.router import api_router

__all__ = ["api_router"]
