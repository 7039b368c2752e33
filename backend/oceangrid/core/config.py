"""
全局配置模块。

集中管理：
- 服务名称与日志级别
- 默认傅里叶网格尺寸与随机种子
- 投影求解的默认海平面高度与最大波高
- 内存中同时保留的模拟实例上限

所有字段均可通过 ``OCEANGRID_`` 前缀的环境变量覆盖。
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置。"""

    model_config = SettingsConfigDict(env_prefix="OCEANGRID_")

    app_name: str = "OceanGrid Backend"
    log_level: str = "INFO"

    default_fourier_size: int = 128
    default_seed: int = 0

    ocean_level: float = 0.0
    max_height: float = 10.0

    max_simulations: int = 32


settings = Settings()
