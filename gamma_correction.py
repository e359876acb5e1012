# gamma_correction.py
from typing import Dict, Optional, Tuple
import numpy as np
import cv2

from gamma_table import generate
from table_config import GammaTable, Mode

# 自动生成查找表时只覆盖 8/16 位图像，更宽的类型需要 2^32 项以上的表
TABLE_DTYPES = (np.dtype(np.uint8), np.dtype(np.uint16))


class GammaCorrection:
    """
    Gamma校正模块
    用预先生成的查找表代替逐像素 pow() 运算。
    """
    def __init__(self):
        # (gamma, dtype, mode) -> GammaTable，同一参数的表只生成一次
        self._tables: Dict[Tuple[float, str, Mode], GammaTable] = {}

    def table_for(self, dtype: np.dtype, gamma: float = 2.2, decoding: bool = True) -> GammaTable:
        """
        返回覆盖该图像类型全部取值范围的查找表 (size = max + 1, max_value = max)。
        """
        dtype = np.dtype(dtype)
        if dtype not in TABLE_DTYPES:
            raise ValueError(f"Gamma校正只能为 uint8/uint16 图像生成查找表, 得到 dtype: {dtype}, 请通过 table 参数提供查找表")
        mode = Mode.DECODE if decoding else Mode.ENCODE
        key = (float(gamma), dtype.name, mode)
        if key not in self._tables:
            max_val = int(np.iinfo(dtype).max)
            self._tables[key] = generate(gamma, max_val + 1, max_val, dtype, mode)
        return self._tables[key]

    def execute(self, rgb_image: np.ndarray, gamma: float = 2.2, decoding: bool = True,
                table: Optional[GammaTable] = None) -> np.ndarray:
        """
        执行Gamma校正。

        Args:
            rgb_image: 输入的图像 (uint8 或 uint16；提供 table 时可以是任意无符号整数类型)。
            gamma: Gamma值，通常为2.2。
            decoding: True 时使用 x^(1/gamma) (提亮中间调)，False 时使用 x^gamma。
            table: 外部提供的查找表，提供时忽略 gamma/decoding。

        Returns:
            校正后的图像，数据类型与查找表一致。
        """
        if rgb_image.dtype.kind != 'u':
            raise ValueError(f"Gamma校正只支持无符号整数图像, 得到 dtype: {rgb_image.dtype}")

        if table is None:
            print(f"Executing Gamma Correction with gamma: {gamma}")
            table = self.table_for(rgb_image.dtype, gamma, decoding)
        else:
            print(f"Executing Gamma Correction with table: {table.name or '<unnamed>'}")

        if rgb_image.size and int(rgb_image.max()) >= len(table):
            raise ValueError(f"图像最大值 {int(rgb_image.max())} 超出查找表范围 (size={len(table)})")

        # cv2.LUT 只接受 uint8 图像和 256 项的表
        if rgb_image.dtype == np.uint8 and len(table) == 256 and table.dtype == np.uint8:
            return cv2.LUT(np.ascontiguousarray(rgb_image), table.values.copy())

        return table.values[rgb_image]
