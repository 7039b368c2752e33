"""
边界调用结果模型。

外部协作方（变换引擎、相机）缺失或失败时，不抛异常也不返回空引用，
而是返回带错误类别的结果，由调用方决定如何处理（通常是跳过本帧）。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class BoundaryErrorKind(str, Enum):
    """边界错误类别。"""

    MISSING_ENGINE = "missing_engine"
    MISSING_CAMERA = "missing_camera"
    TRANSFORM_FAILED = "transform_failed"


@dataclass(frozen=True)
class BoundaryResult:
    """边界调用结果。"""

    value: Any = None
    error: Optional[BoundaryErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "BoundaryResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BoundaryErrorKind, message: str) -> "BoundaryResult":
        return cls(error=error, message=message)
