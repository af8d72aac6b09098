# dwt/hat.py
# ---------------------
# Hat 变换：a trous 小波分解的低通步（三角核 1-2-1）
# ✅ 越界下标一律镜像反射，不需要单独的边缘处理

import numpy as np


def level_scale(level, extent):
    """第 level 层的步长 2^level，不超过所在维度的长度"""
    return min(1 << level, extent)


def mirror_index(idx, size):
    """把任意下标镜像反射回 [0, size)

    靠近开头: abs(i)；靠近末尾: 2*(size-1) - i。
    步长大于维度时会反复反射，保证永远不会越界读取。
    """
    idx = np.asarray(idx)
    if size == 1:
        return np.zeros_like(idx)
    period = 2 * (size - 1)
    idx = np.abs(idx) % period
    return np.where(idx >= size, period - idx, idx)


def hat_transform(base, scale, axis=0, out=None):
    """沿 axis 做一次 hat 平滑: (2*x[i] + x[i-scale] + x[i+scale]) / 4"""
    base = np.asarray(base)
    size = base.shape[axis]
    scale = min(scale, size)
    pos = np.arange(size)
    left = np.take(base, mirror_index(pos - scale, size), axis=axis)
    right = np.take(base, mirror_index(pos + scale, size), axis=axis)
    return np.multiply(2.0 * base + left + right, 0.25, out=out)


def soft_threshold(diff, thold):
    # 向 0 收缩 thold，|diff| <= thold 的部分直接置 0
    return np.maximum(diff - thold, 0.0) + np.minimum(diff + thold, 0.0)
