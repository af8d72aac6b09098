# 文件：test/test_hat.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np

from dwt.hat import hat_transform, level_scale, mirror_index, soft_threshold


def test_reflection_matches_hand_computed_values():
    line = np.array([0, 10, 0, 10, 0], dtype=np.float32)
    out = hat_transform(line, 2)
    # i=0: (2*0 + x[2] + x[2]) / 4，i=3: (2*10 + x[1] + x[2*4-5]) / 4
    expected = [
        (2 * 0 + line[2] + line[2]) / 4,
        (2 * 10 + line[1] + line[3]) / 4,
        (2 * 0 + line[0] + line[4]) / 4,
        (2 * 10 + line[1] + line[3]) / 4,
        (2 * 0 + line[2] + line[2]) / 4,
    ]
    np.testing.assert_allclose(out, expected, atol=1e-6)


def test_reflection_on_ramp():
    out = hat_transform(np.array([1, 2, 3, 4, 5], dtype=np.float32), 2)
    np.testing.assert_allclose(out, [2.0, 2.5, 3.0, 3.5, 4.0], atol=1e-6)


def test_scale_is_clamped_to_extent():
    assert level_scale(3, 3) == 3
    assert level_scale(3, 100) == 8
    assert level_scale(0, 1) == 1

    # height=3 时 8 被截到 3，反射两次后仍在 [0, 3) 内
    out = hat_transform(np.array([1, 2, 3], dtype=np.float32), 8)
    np.testing.assert_allclose(out, [1.5, 2.0, 2.5], atol=1e-6)


def test_mirror_index_never_leaves_range():
    for size in range(1, 10):
        idx = mirror_index(np.arange(-3 * size, 3 * size), size)
        assert idx.min() >= 0
        assert idx.max() < size


def test_mirror_index_inside_range_is_identity():
    np.testing.assert_array_equal(mirror_index(np.arange(7), 7), np.arange(7))


def test_hat_along_axis_matches_per_column():
    rng = np.random.default_rng(1)
    img = rng.random((9, 5)).astype(np.float32)
    out = hat_transform(img, 2, axis=0)
    for col in range(img.shape[1]):
        np.testing.assert_allclose(out[:, col], hat_transform(img[:, col], 2), atol=1e-6)


def test_hat_of_constant_is_constant():
    img = np.full((4, 6), 10.0, dtype=np.float32)
    out = np.empty_like(img)
    hat_transform(img, 4, axis=1, out=out)
    np.testing.assert_array_equal(out, img)


def test_soft_threshold_shrinks_towards_zero():
    diff = np.array([-3.0, -1.0, 0.0, 1.0, 3.0], dtype=np.float32)
    np.testing.assert_allclose(soft_threshold(diff, np.float32(2.0)), [-1.0, 0.0, 0.0, 0.0, 1.0])
