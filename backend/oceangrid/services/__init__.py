"""
业务服务模块。

包含波浪谱、谱生成、色散表、频谱演化、投影求解、投影网格、海面模拟等服务。
"""

from oceangrid.services.dispersion import build_dispersion_table
from oceangrid.services.evolver import (
    NumpyTransformEngine,
    SpectrumEvolver,
    evolve,
    field_spectra,
    hermitian,
)
from oceangrid.services.generator import SpectrumGenerator, checksum
from oceangrid.services.projected_grid import (
    create_screen_grid,
    cull_mode,
    grid_dimensions,
    reconstruct_world_positions,
)
from oceangrid.services.projection import ProjectionSolver
from oceangrid.services.simulation import OceanFrame, OceanSimulation
from oceangrid.services.spectrum import SpectrumModel, dispersion

__all__ = [
    "SpectrumModel",
    "dispersion",
    "SpectrumGenerator",
    "checksum",
    "build_dispersion_table",
    "SpectrumEvolver",
    "NumpyTransformEngine",
    "evolve",
    "hermitian",
    "field_spectra",
    "ProjectionSolver",
    "grid_dimensions",
    "create_screen_grid",
    "reconstruct_world_positions",
    "cull_mode",
    "OceanSimulation",
    "OceanFrame",
]
