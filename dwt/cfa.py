# dwt/cfa.py
# ---------------------
# CFA（Color Filter Array）描述：2x2 Bayer 或 6x6 X-Trans
# 颜色编号: 0=R, 1=G, 2=B

import numpy as np

RED, GREEN, BLUE = 0, 1, 2

_BAYER_TABLES = {
    "rggb": ((RED, GREEN), (GREEN, BLUE)),
    "bggr": ((BLUE, GREEN), (GREEN, RED)),
    "grbg": ((GREEN, RED), (BLUE, GREEN)),
    "gbrg": ((GREEN, BLUE), (RED, GREEN)),
}

# 富士 X-Trans 传感器的标准排列
XTRANS_DEFAULT = (
    (1, 1, 0, 1, 1, 2),
    (1, 1, 2, 1, 1, 0),
    (2, 0, 1, 0, 2, 1),
    (1, 1, 2, 1, 1, 0),
    (1, 1, 0, 1, 1, 2),
    (0, 2, 1, 2, 0, 1),
)

_DESC_TO_COLOR = {"R": RED, "G": GREEN, "B": BLUE}


class CFAPattern:
    def __init__(self, table):
        table = np.asarray(table, dtype=np.int64)
        if table.shape not in ((2, 2), (6, 6)):
            raise ValueError(f"CFA 表必须是 2x2 或 6x6，当前为 {table.shape}")
        if table.min() < 0 or table.max() > 2:
            raise ValueError("CFA 表只能包含颜色编号 0(R) / 1(G) / 2(B)")
        self.table = table.astype(np.uint8)
        self.table.setflags(write=False)

    @classmethod
    def bayer(cls, pattern="rggb"):
        code = str(pattern).lower()
        if code not in _BAYER_TABLES:
            raise ValueError(f"未知的 Bayer 模式 '{pattern}'，可选: {sorted(_BAYER_TABLES)}")
        return cls(_BAYER_TABLES[code])

    @classmethod
    def xtrans(cls, table=None):
        table = XTRANS_DEFAULT if table is None else table
        pattern = cls(table)
        if not pattern.is_xtrans:
            raise ValueError("X-Trans 表必须是 6x6")
        return pattern

    @classmethod
    def from_rawpy(cls, raw_pattern, color_desc):
        """由 rawpy 的 raw_pattern / color_desc 构造，例如 b'RGBG' 中第二个 G 也映射为绿色"""
        if isinstance(color_desc, bytes):
            color_desc = color_desc.decode("ascii")
        lookup = [_DESC_TO_COLOR[ch] for ch in color_desc.upper()]
        return cls(np.asarray(lookup)[np.asarray(raw_pattern)])

    @property
    def is_xtrans(self):
        return self.table.shape[0] == 6

    def color_at(self, row, col):
        n = self.table.shape[0]
        return int(self.table[row % n, col % n])

    def color_map(self, height, width):
        """整幅图每个像素的颜色编号"""
        n = self.table.shape[0]
        rows = np.arange(height) % n
        cols = np.arange(width) % n
        return self.table[rows[:, None], cols[None, :]]

    def __repr__(self):
        kind = "X-Trans" if self.is_xtrans else "Bayer"
        return f"CFAPattern({kind}, {self.table.tolist()})"
