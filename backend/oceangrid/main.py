"""
FastAPI 应用入口。
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oceangrid.api import api_router
from oceangrid.core.config import settings
from oceangrid.core.storage import simulation_storage

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理器。

    处理应用启动和关闭事件。
    """
    logger.info("Starting ocean backend server...")

    yield

    # 关闭时释放所有模拟实例（谱网格与双缓冲可能占用较多内存）
    count = len(simulation_storage)
    if count:
        logger.info(f"Releasing {count} ocean simulation(s)...")
        simulation_storage.clear()

    logger.info("Ocean backend server shutdown complete.")


def create_app() -> FastAPI:
    """创建并配置 FastAPI 应用实例。"""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="海面频谱模拟与投影网格求解服务",
        lifespan=lifespan,
    )

    # 配置 CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # 开发环境允许所有来源，生产环境应限制
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 挂载 API 路由
    app.include_router(api_router, prefix="/api")

    @app.get("/", tags=["root"])
    async def root():
        """根路径。"""
        return {
            "message": "OceanGrid Backend API",
            "version": __version__,
            "docs": "/docs",
        }

    @app.get("/health", tags=["health"])
    async def health():
        """健康检查。"""
        return {"status": "healthy"}

    return app


app = create_app()
