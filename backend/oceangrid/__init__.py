"""
OceanGrid：海面频谱模拟与投影网格求解。
"""
