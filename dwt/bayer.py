# dwt/bayer.py
# ---------------------
# Bayer 路径：把 R/G1/G2/B 各自抽成半分辨率单色平面，逐层做可分离小波分解
# ✅ 垂直 pass 不做归一化，水平 pass 一次性除以 16

import numpy as np

from dwt.hat import level_scale, mirror_index, soft_threshold
from dwt.schedule import row_schedule, run_blocks


def _vertical_pass(interm, img, lev, pool=None):
    """interm = 2*center + above + below，above/below 为相距 vscale 的行"""
    height = img.shape[0]
    vscale = level_scale(lev, height)
    order = row_schedule(height, vscale)
    above = mirror_index(order - vscale, height)
    below = mirror_index(order + vscale, height)

    def run(sl):
        rows = order[sl]
        interm[rows] = 2.0 * img[rows] + img[above[sl]] + img[below[sl]]

    run_blocks(run, height, pool)


def _horizontal_pass(interm, img, accum, lev, thold, last, pool=None):
    """水平平滑 interm 得到新的 coarse 写回 img，超出阈值的细节累加到 accum"""
    height, width = img.shape
    hscale = level_scale(lev, width)
    cols = np.arange(width)
    left = mirror_index(cols - hscale, width)
    right = mirror_index(cols + hscale, width)

    def run(sl):
        coarse = interm[sl]
        hat = (2.0 * coarse + coarse[:, left] + coarse[:, right]) / 16.0
        diff = img[sl] - hat
        img[sl] = hat
        accum[sl] += soft_threshold(diff, thold)
        if last:
            # 残差 + 累积细节 = 去噪结果
            img[sl] += accum[sl]

    run_blocks(run, height, pool)


def dwt_denoise(img, noise, pool=None):
    """对单色平面原地做 len(noise) 层分解与软阈值"""
    accum = np.zeros_like(img)
    interm = np.empty_like(img)
    bands = len(noise)
    for lev in range(bands):
        _vertical_pass(interm, img, lev, pool)
        _horizontal_pass(interm, img, accum, lev, noise[lev], lev + 1 == bands, pool)
    return img


def wavelet_denoise(raw, cfa, profile, pool=None):
    """raw: float32 马赛克；返回新的去噪马赛克"""
    out = np.empty_like(raw)
    for c in range(4):
        # c=0..3 依次为 (0,0) (1,0) (0,1) (1,1) 起点的子平面
        row0, col0 = c & 1, c >> 1
        samples = raw[row0::2, col0::2]
        if samples.size == 0:
            continue
        noise = profile.bayer_thresholds(cfa.color_at(row0, col0))

        # sqrt 作为方差稳定变换，负值先截到 0
        fimg = np.sqrt(np.maximum(samples, 0.0))
        dwt_denoise(fimg, noise, pool)
        out[row0::2, col0::2] = fimg * fimg
    return out
