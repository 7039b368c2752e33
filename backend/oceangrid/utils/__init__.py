"""
通用工具函数模块。
"""

from oceangrid.utils.matrix import (
    look_at,
    perspective,
    segment_plane_intersection,
    transform_point,
)
from oceangrid.utils.numerical import (
    is_power_of_two,
    next_power_of_two,
    safe_inverse,
    safe_normalize,
    signed_indices,
)

__all__ = [
    "look_at",
    "perspective",
    "transform_point",
    "segment_plane_intersection",
    "is_power_of_two",
    "next_power_of_two",
    "safe_inverse",
    "safe_normalize",
    "signed_indices",
]
