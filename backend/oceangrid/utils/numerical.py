"""
数值计算工具。

提供 2 的幂判断/取整、安全归一化、安全求逆等功能。
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)

# 判定为零长度/奇异的阈值
EPSILON = 1e-9


def is_power_of_two(n: int) -> bool:
    """判断 n 是否为 2 的幂。"""
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """
    返回不小于 n 的最小 2 的幂。

    Args:
        n: 正整数

    Returns:
        2 的幂
    """
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def safe_normalize(v: np.ndarray) -> np.ndarray:
    """归一化向量，零长度向量返回零向量。"""
    v = np.asarray(v, dtype=np.float64)
    length = np.linalg.norm(v)
    if length < EPSILON:
        return np.zeros_like(v)
    return v / length


def safe_inverse(m: np.ndarray) -> np.ndarray:
    """
    矩阵求逆，奇异或结果非有限时返回单位阵。

    Args:
        m: 方阵

    Returns:
        逆矩阵（或单位阵）
    """
    m = np.asarray(m, dtype=np.float64)
    try:
        inverse = np.linalg.inv(m)
    except np.linalg.LinAlgError:
        logger.debug("Singular matrix, falling back to identity")
        return np.identity(m.shape[0])

    if not np.all(np.isfinite(inverse)):
        logger.debug("Non-finite inverse, falling back to identity")
        return np.identity(m.shape[0])

    return inverse


def signed_indices(n: int) -> np.ndarray:
    """
    频率网格的有符号索引。

    索引 >= n/2 折回为负值，例如 n=4 时为 [0, 1, -2, -1]。
    """
    idx = np.arange(n, dtype=np.float64)
    return np.where(idx >= n / 2, idx - n, idx)
