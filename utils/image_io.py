# image_io.py
import os

import cv2
import numpy as np


def _ensure_dir(path):
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)


def save_mosaic_preview(mosaic, path, reference_max=None, gamma=2.2):
    """把线性 RAW 马赛克存成 8bit 灰度 PNG 便于肉眼检查

    reference_max 用于让去噪前后两张图使用同一缩放；加 gamma 让暗部噪声可见。
    """
    img = np.clip(mosaic.astype(np.float32), 0, None)
    max_val = reference_max if reference_max is not None else img.max()
    if max_val > 0:
        img = np.power(img / max_val, 1.0 / gamma)
        img_8bit = np.clip(img * 255.0, 0, 255).astype(np.uint8)
    else:
        img_8bit = np.zeros(img.shape, dtype=np.uint8)

    _ensure_dir(path)
    cv2.imwrite(path, img_8bit)


def save_noise_map(before, after, path, mean_level=64.0):
    """去掉的噪声 |before - after|，平均值映射到 mean_level，方便看去噪是否吃掉了细节"""
    removed = np.abs(before.astype(np.float32) - after.astype(np.float32))
    mean = removed.mean()
    scale = mean_level / mean if mean > 0 else 0.0
    img_8bit = np.clip(removed * scale, 0, 255).astype(np.uint8)

    _ensure_dir(path)
    cv2.imwrite(path, img_8bit)


def write_raw(mosaic, path, bit_depth):
    """按 unpacked uint16 小端格式写回 .raw，与 read_raw 对称"""
    max_value = (1 << bit_depth) - 1
    data = np.clip(np.rint(mosaic), 0, max_value).astype("<u2")
    _ensure_dir(path)
    data.tofile(path)
