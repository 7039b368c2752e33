"""
海面模拟相关 API 路由。
"""

from fastapi import APIRouter, Body, HTTPException

from oceangrid.core.simulation_manager import (
    SimulationLimitError,
    create_simulation,
    delete_simulation,
    get_simulation,
    step_simulation,
)
from oceangrid.schemas.api import (
    ErrorResponse,
    SimulationCreateResponse,
    SimulationInfoResponse,
    StepRequest,
    StepResponse,
)
from oceangrid.schemas.base import SpectrumConfig

router = APIRouter(prefix="/ocean", tags=["ocean"])


def _ensure_simulation(simulation_id: str):
    record = get_simulation(simulation_id)
    if record is None:
        raise HTTPException(
            status_code=404, detail=f"Simulation {simulation_id} not found"
        )
    return record


@router.post(
    "/simulations",
    response_model=SimulationCreateResponse,
    status_code=201,
    summary="创建海面模拟实例",
)
async def create_ocean_simulation(
    config: SpectrumConfig = Body(
        ...,
        examples=[
            {
                "wind_speed": 8.0,
                "wave_amp": 1.0,
                "omega": 0.84,
                "grid_sizes": [5488, 392, 28, 2],
                "choppiness": [2.3, 2.1, 1.3, 0.9],
                "fourier_size": 128,
                "seed": 0,
            }
        ],
    ),
) -> SimulationCreateResponse:
    """
    创建海面模拟实例。

    生成波浪谱、色散表与斜率方差修正值。fourier_size 不是 2 的幂或超过 256 时
    会被修正，响应中返回修正后的值。
    """
    try:
        record = create_simulation(config)
    except SimulationLimitError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Spectrum generation failed: {str(e)}"
        )

    return SimulationCreateResponse(
        simulation_id=record.simulation_id,
        status=record.status,
        fourier_size=record.config.fourier_size,
        variance_correction=record.simulation.variance_correction,
        checksum=record.checksum,
    )


@router.get(
    "/simulations/{simulation_id}",
    response_model=SimulationInfoResponse,
    summary="获取海面模拟实例信息",
)
async def get_ocean_simulation(simulation_id: str) -> SimulationInfoResponse:
    record = _ensure_simulation(simulation_id)
    return SimulationInfoResponse(
        simulation_id=record.simulation_id,
        status=record.status,
        config=record.config,
        time=record.simulation.time,
        last_frame=record.last_frame,
    )


@router.post(
    "/simulations/{simulation_id}/step",
    response_model=StepResponse,
    summary="演化到指定时间",
)
async def step_ocean_simulation(
    simulation_id: str, request: StepRequest
) -> StepResponse:
    """
    把频谱演化到绝对时间 time 并做逆变换，返回各层高度统计。

    变换引擎缺失或失败时返回 503，错误类别见 detail。
    """
    record = _ensure_simulation(simulation_id)
    result = step_simulation(record, request.time)
    if not result.ok:
        raise HTTPException(
            status_code=503,
            detail=ErrorResponse(
                code=result.error.value, message=result.message
            ).model_dump(exclude_none=True),
        )

    heights = None
    if request.include_heights:
        heights = result.value.heights(0).tolist()

    return StepResponse(
        simulation_id=simulation_id, frame=record.last_frame, heights=heights
    )


@router.delete(
    "/simulations/{simulation_id}",
    status_code=204,
    summary="删除海面模拟实例",
)
async def delete_ocean_simulation(simulation_id: str) -> None:
    if not delete_simulation(simulation_id):
        raise HTTPException(
            status_code=404, detail=f"Simulation {simulation_id} not found"
        )
