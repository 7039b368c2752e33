"""
投影网格求解服务。

计算投影器的视图投影矩阵与插值矩阵。插值矩阵把屏幕空间网格顶点
转换为投影平面（海平面）上的世界坐标。
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from oceangrid.models.projection import Camera, ProjectionState
from oceangrid.models.result import BoundaryErrorKind, BoundaryResult
from oceangrid.utils.matrix import WORLD_UP, look_at, segment_plane_intersection
from oceangrid.utils.numerical import EPSILON, safe_inverse

logger = logging.getLogger(__name__)

# 投影器位置在波高带之外再留出的余量
AIM_MARGIN = 5.0

# 投影器看向视线前方的距离
LOOK_AHEAD = 50.0

# 单位四边形角点
QUAD_CORNERS = np.array(
    [
        [0.0, 0.0, 0.0, 1.0],
        [1.0, 0.0, 0.0, 1.0],
        [1.0, 1.0, 0.0, 1.0],
        [0.0, 1.0, 0.0, 1.0],
    ]
)

# 裁剪空间视锥角点（前 4 个为近平面，后 4 个为远平面）
FRUSTUM_CORNERS = np.array(
    [
        [-1.0, -1.0, -1.0, 1.0],
        [1.0, -1.0, -1.0, 1.0],
        [1.0, 1.0, -1.0, 1.0],
        [-1.0, 1.0, -1.0, 1.0],
        [-1.0, -1.0, 1.0, 1.0],
        [1.0, -1.0, 1.0, 1.0],
        [1.0, 1.0, 1.0, 1.0],
        [-1.0, 1.0, 1.0, 1.0],
    ]
)

# 视锥的 12 条棱
FRUSTUM_EDGES = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


def aim_projector(
    camera: Camera, ocean_level: float, max_height: float
) -> Tuple[np.ndarray, np.ndarray, bool]:
    """
    重新瞄准投影器。

    相机的视图矩阵可能处于让投影数学失效的方向，因此另建一个
    总是有效的视图：位置被推到波高带之外，看向前方 50 单位处的海平面。

    Returns:
        (视图矩阵, 投影器位置, is_flipped)
    """
    pos = camera.position.copy()
    band = max(0.0, max_height) + AIM_MARGIN

    # 相机在海平面以下时翻转投影
    if pos[1] < ocean_level:
        is_flipped = True
        pos[1] = min(pos[1], ocean_level - band)
    else:
        is_flipped = False
        pos[1] = max(pos[1], ocean_level + band)

    target = pos + camera.forward * LOOK_AHEAD
    target[1] = ocean_level

    view = look_at(pos, target, WORLD_UP)
    # x 轴取反，与渲染边界的三角形绕序一致
    view[0, :] *= -1.0
    return view, pos, is_flipped


def frustum_corners(inverse_vp: np.ndarray) -> np.ndarray:
    """把裁剪空间视锥角点变换到世界空间，shape: (8, 3)。"""
    p = FRUSTUM_CORNERS @ inverse_vp.T
    w = p[:, 3:4]
    w = np.where(np.abs(w) < EPSILON, np.copysign(EPSILON, w), w)
    return p[:, :3] / w


def collect_range_points(
    corners: np.ndarray, ocean_level: float, band: float
) -> List[np.ndarray]:
    """
    收集落在波高带 [ocean_level - band, ocean_level + band] 内的视锥角点，
    以及 12 条棱与上下两个平面的交点。
    """
    points = [
        corner
        for corner in corners
        if ocean_level - band <= corner[1] <= ocean_level + band
    ]

    for i0, i1 in FRUSTUM_EDGES:
        p0, p1 = corners[i0], corners[i1]
        for plane in (ocean_level + band, ocean_level - band):
            hit = segment_plane_intersection(p0, p1, WORLD_UP, plane)
            if hit is not None:
                points.append(hit)

    return points


def range_matrix(
    points: List[np.ndarray], projector_vp: np.ndarray, ocean_level: float
) -> Tuple[np.ndarray, bool]:
    """
    构造范围转换矩阵 R。

    网格投影在平面上，但波浪占据一段高度范围；R 修正投影矩阵，使投影网格
    总是覆盖整个屏幕。目前只考虑 y 方向位移，不考虑 xz 位移。

    Returns:
        (R, visible)；没有点或包围盒退化时返回单位阵
    """
    r = np.identity(4)
    if not points:
        return r, False

    q = np.array([[p[0], ocean_level, p[2], 1.0] for p in points])
    clip = q @ projector_vp.T
    w = clip[:, 3]
    w = np.where(np.abs(w) < EPSILON, np.copysign(EPSILON, w), w)
    x = clip[:, 0] / w
    y = clip[:, 1] / w

    xmin, xmax = float(np.min(x)), float(np.max(x))
    ymin, ymax = float(np.min(y)), float(np.max(y))

    if xmax - xmin < EPSILON or ymax - ymin < EPSILON:
        logger.debug("Degenerate range bounds, using identity range matrix")
        return r, False

    r[0, 0] = xmax - xmin
    r[0, 3] = xmin
    r[1, 1] = ymax - ymin
    r[1, 3] = ymin
    return r, True


def homogeneous_project(
    inverse_vp: np.ndarray, corner: np.ndarray, ocean_level: float
) -> np.ndarray:
    """
    在齐次空间求角点射线与海平面的交点。

    投影器空间中 z = -1 与 z = 1 两点变换到世界（齐次）空间，
    求连线与 y = h 平面的交点。结果保持齐次形式，便于顶点阶段对其余
    网格点做插值。
    """
    a = inverse_vp @ np.array([corner[0], corner[1], -1.0, 1.0])
    b = inverse_vp @ np.array([corner[0], corner[1], 1.0, 1.0])
    ab = b - a
    h = ocean_level

    denom = ab[1] - ab[3] * h
    if abs(denom) < EPSILON:
        return a

    t = (a[3] * h - a[1]) / denom
    return a + ab * t


class ProjectionSolver:
    """
    投影求解器。

    每帧从相机位姿完整重算一次，不做增量更新。
    """

    def __init__(self, ocean_level: float = 0.0, max_height: float = 10.0):
        self.ocean_level = ocean_level
        self.max_height = max_height
        self.state: Optional[ProjectionState] = None

    def solve(self, camera: Camera) -> ProjectionState:
        """
        求解单帧投影。

        Args:
            camera: 相机

        Returns:
            ProjectionState
        """
        ocean_level = self.ocean_level
        max_height = self.max_height

        projector_p = camera.projection_matrix()
        projector_v, position, is_flipped = aim_projector(
            camera, ocean_level, max_height
        )
        projector_vp = projector_p @ projector_v

        # 视锥来自相机自身的视图，范围需覆盖相机实际看到的区域
        camera_ivp = safe_inverse(projector_p @ camera.view_matrix())
        band = max(1.0, max_height)
        points = collect_range_points(frustum_corners(camera_ivp), ocean_level, band)
        r, visible = range_matrix(points, projector_vp, ocean_level)

        ivp = safe_inverse(projector_vp) @ r
        interpolation = np.stack(
            [homogeneous_project(ivp, corner, ocean_level) for corner in QUAD_CORNERS]
        )

        return ProjectionState(
            ocean_level=ocean_level,
            max_height=max_height,
            is_flipped=is_flipped,
            projector_vp=safe_inverse(r) @ projector_vp,
            interpolation=interpolation,
            projector_view=projector_v,
            projector_proj=projector_p,
            range_matrix=r,
            projector_position=position,
            visible=visible,
        )

    def update(self, camera: Optional[Camera]) -> BoundaryResult:
        """
        每帧入口。

        没有相机时跳过本帧，保留上一帧状态。
        """
        if camera is None:
            logger.warning("No camera available, skipping projection update")
            return BoundaryResult.failure(
                BoundaryErrorKind.MISSING_CAMERA, "camera is required"
            )

        self.state = self.solve(camera)
        return BoundaryResult.success(self.state)
