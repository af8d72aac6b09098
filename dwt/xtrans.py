# dwt/xtrans.py
# ---------------------
# X-Trans 路径：6x6 排列没有统一的 2x2 子采样，直接在全分辨率马赛克上做平移不变分解
# ✅ 每个颜色一张稀疏平面，相邻位置用最近邻填充，保证 hat 变换的输入都有定义

import numpy as np

from dwt.cfa import GREEN
from dwt.hat import hat_transform, level_scale, soft_threshold
from dwt.noise_profile import BANDS
from dwt.schedule import run_blocks

# 填充偏移(目标 - 源)。按行优先顺序靠后的源覆盖靠前的源，所以偏移从大到小依次写
_GREEN_FILL = ((1, 0), (0, 1))
_CHROMA_FILL = ((1, 1), (1, 0), (1, -1), (0, 1), (0, -1), (-1, 1), (-1, 0), (-1, -1))


def sparse_plane(raw, colors, c):
    """抽取颜色 c 的 sqrt 平面，并向右/下（绿）或 8 邻域（红蓝）做最近邻填充"""
    height, width = raw.shape
    plane = np.zeros_like(raw)
    start = 0 if c == GREEN else 1
    region = np.zeros(raw.shape, dtype=bool)
    region[start:height - 1, start:width - 1] = True

    ys, xs = np.nonzero((colors == c) & region)
    values = np.sqrt(np.maximum(raw[ys, xs], 0.0))
    for dy, dx in (_GREEN_FILL if c == GREEN else _CHROMA_FILL):
        plane[ys + dy, xs + dx] = values
    # 源位置始终保留自己的采样
    plane[ys, xs] = values
    return plane


def _hat_rows(src, scale, pool=None):
    out = np.empty_like(src)

    def run(sl):
        hat_transform(src[sl], scale, axis=1, out=out[sl])

    run_blocks(run, src.shape[0], pool)
    return out


def hat_2d(src, lev, pool=None):
    """先沿列滤波（转置后按行处理，访存连续），再转回来沿行滤波"""
    height, width = src.shape
    trans = _hat_rows(np.ascontiguousarray(src.T), level_scale(lev, height), pool)
    return _hat_rows(np.ascontiguousarray(trans.T), level_scale(lev, width), pool)


def wavelet_denoise_xtrans(raw, cfa, profile, pool=None):
    """raw: float32 马赛克；返回新的去噪马赛克"""
    height, width = raw.shape
    colors = cfa.color_map(height, width)
    out = np.empty_like(raw)

    for c in range(3):
        noise = profile.xtrans_thresholds(c)
        accum = np.zeros_like(raw)
        prev = sparse_plane(raw, colors, c)
        for lev in range(BANDS):
            cur = hat_2d(prev, lev, pool)
            accum += soft_threshold(prev - cur, noise[lev])
            prev = cur

        mask = colors == c
        d = accum[mask] + prev[mask]
        out[mask] = d * d
    return out
