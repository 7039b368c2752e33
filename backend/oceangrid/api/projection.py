"""
投影求解 API 路由。
"""

import logging

from fastapi import APIRouter, HTTPException

from oceangrid.models.projection import Camera
from oceangrid.schemas.api import ProjectionRequest, ProjectionResponse
from oceangrid.services.projected_grid import cull_mode
from oceangrid.services.projection import ProjectionSolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projection", tags=["projection"])


@router.post(
    "/solve",
    response_model=ProjectionResponse,
    summary="求解投影网格矩阵",
)
async def solve_projection(request: ProjectionRequest) -> ProjectionResponse:
    """
    由相机位姿求解投影器视图投影矩阵与插值矩阵。

    求解无状态，每次请求从头计算。
    """
    solver = ProjectionSolver(
        ocean_level=request.projection.ocean_level,
        max_height=request.projection.max_height,
    )
    try:
        state = solver.solve(Camera.from_config(request.camera))
    except Exception as e:
        logger.error(f"Projection solve failed: {e}")
        raise HTTPException(
            status_code=500, detail=f"Projection solve failed: {str(e)}"
        )

    return ProjectionResponse(
        is_flipped=state.is_flipped,
        cull_mode=cull_mode(state.is_flipped),
        visible=state.visible,
        projector_vp=state.projector_vp.tolist(),
        interpolation=state.interpolation.tolist(),
        projector_position=state.projector_position.tolist(),
    )
