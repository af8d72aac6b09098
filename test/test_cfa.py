# 文件：test/test_cfa.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np
import pytest

from dwt.cfa import BLUE, GREEN, RED, XTRANS_DEFAULT, CFAPattern


@pytest.mark.parametrize("code,top_left,bottom_right", [
    ("rggb", RED, BLUE),
    ("bggr", BLUE, RED),
    ("grbg", GREEN, GREEN),
    ("GBRG", GREEN, GREEN),
])
def test_bayer_codes(code, top_left, bottom_right):
    cfa = CFAPattern.bayer(code)
    assert not cfa.is_xtrans
    assert cfa.color_at(0, 0) == top_left
    assert cfa.color_at(1, 1) == bottom_right
    # 2x2 周期
    assert cfa.color_at(4, 6) == top_left


def test_unknown_bayer_code():
    with pytest.raises(ValueError):
        CFAPattern.bayer("rgbw")


def test_xtrans_default_and_color_map():
    cfa = CFAPattern.xtrans()
    assert cfa.is_xtrans
    colors = cfa.color_map(13, 8)
    assert colors.shape == (13, 8)
    np.testing.assert_array_equal(colors[:6, :6], XTRANS_DEFAULT)
    np.testing.assert_array_equal(colors[6:12, :6], XTRANS_DEFAULT)
    assert colors[12, 7] == cfa.color_at(12, 7) == XTRANS_DEFAULT[0][1]
    # X-Trans 每 6x6 里 20 个绿、8 个红、8 个蓝
    counts = np.bincount(np.asarray(XTRANS_DEFAULT).ravel())
    np.testing.assert_array_equal(counts, [8, 20, 8])


def test_rejects_bad_tables():
    with pytest.raises(ValueError):
        CFAPattern(np.zeros((3, 3)))
    with pytest.raises(ValueError):
        CFAPattern([[0, 1], [3, 2]])
    with pytest.raises(ValueError):
        CFAPattern.xtrans([[0, 1], [1, 2]])


def test_from_rawpy_maps_second_green():
    cfa = CFAPattern.from_rawpy(np.array([[0, 1], [3, 2]]), b"RGBG")
    np.testing.assert_array_equal(cfa.table, CFAPattern.bayer("rggb").table)
