# ---------------------
# 读取 RAW 图像
# - .raw: 无封装的 unpacked 格式，每像素 2 字节（小端），10/12/14/16bit
# - 相机 RAW (.dng/.raf/.nef/...): 通过 rawpy 读取可见区域和 CFA 排列
# 新手建议：确保 .raw 的分辨率、位深与 config.yaml 一致

import os

import numpy as np
import rawpy

from dwt.cfa import CFAPattern

SUPPORTED_BIT_DEPTHS = (10, 12, 14, 16)
CAMERA_RAW_EXTENSIONS = (".dng", ".raf", ".nef", ".cr2", ".cr3", ".arw", ".orf", ".rw2")


def read_raw(cfg):
    path = cfg['path']
    width = cfg['width']
    height = cfg['height']
    bit_depth = cfg['sensor_bit_depth']

    if bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise NotImplementedError(f"只支持 {SUPPORTED_BIT_DEPTHS} bit 的 unpacked raw，当前 {bit_depth}")

    raw = np.fromfile(path, dtype="<u2")
    if raw.size != width * height:
        raise ValueError(f"{path}: 数据量 {raw.size} 与配置尺寸 {width}x{height} 不符")
    raw = raw.reshape((height, width))

    # 高位脏数据截掉，避免超出传感器位深
    raw = np.minimum(raw, (1 << bit_depth) - 1)
    return raw.astype(np.float32)


def read_camera_raw(path):
    """返回 (mosaic, CFAPattern)"""
    with rawpy.imread(path) as raw:
        mosaic = raw.raw_image_visible.astype(np.float32)
        cfa = CFAPattern.from_rawpy(raw.raw_pattern, raw.color_desc)
    print(f"读取相机 RAW: {os.path.basename(path)}, 尺寸 {mosaic.shape}, CFA {cfa}")
    return mosaic, cfa


def load_mosaic(cfg):
    """按扩展名选择读取方式；.raw 文件不带 CFA 信息，返回 None"""
    ext = os.path.splitext(cfg['path'])[1].lower()
    if ext in CAMERA_RAW_EXTENSIONS:
        return read_camera_raw(cfg['path'])
    return read_raw(cfg), None
