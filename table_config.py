# table_config.py
from enum import Enum
from typing import NamedTuple, Optional, List
import numpy as np


# 支持的目标整数位宽 -> numpy 无符号类型 (封闭集合，不做类型推断)
WIDTH_DTYPES = {
    8: np.uint8,
    16: np.uint16,
    32: np.uint32,
    64: np.uint64,
}

# 参数块里 entry_type 的写法 -> 位宽
ENTRY_TYPE_WIDTHS = {f"u{width}": width for width in WIDTH_DTYPES}


def max_for_width(width: int) -> int:
    """返回该位宽能表示的最大值 (Python int，不会截断)"""
    return int(np.iinfo(WIDTH_DTYPES[width]).max)


def entry_type_name(width: int) -> str:
    return f"u{width}"


class Mode(Enum):
    """
    曲线方向:
        ENCODE: output = x ^ gamma，中间调变暗
        DECODE: output = x ^ (1/gamma)，中间调变亮
    """
    ENCODE = 'encode'
    DECODE = 'decode'


class TableConfig(NamedTuple):
    """
    一次生成请求的参数。只应由 ParameterValidator 构造。
    """
    exponent: float
    size: int
    output_ceiling: int
    target_width: int = 8
    mode: Mode = Mode.ENCODE
    name: Optional[str] = None

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(WIDTH_DTYPES[self.target_width])

    @property
    def effective_exponent(self) -> float:
        if self.mode is Mode.DECODE:
            return 1.0 / self.exponent
        return self.exponent


class GammaTable:
    """
    生成结果：只读的 numpy 数组 + 生成它的配置。
    生成后不可修改，由调用者持有。
    """
    __slots__ = ('_values', '_config')

    def __init__(self, values: np.ndarray, config: TableConfig):
        values = np.array(values, dtype=config.dtype)
        values.flags.writeable = False
        self._values = values
        self._config = config

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def config(self) -> TableConfig:
        return self._config

    @property
    def name(self) -> Optional[str]:
        return self._config.name

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __eq__(self, other):
        if not isinstance(other, GammaTable):
            return NotImplemented
        return self._config == other._config and np.array_equal(self._values, other._values)

    def __hash__(self):
        return hash((self._config, self._values.tobytes()))

    def __repr__(self):
        return f"GammaTable(name={self.name!r}, size={len(self)}, dtype={self.dtype})"

    def tolist(self) -> List[int]:
        return [int(v) for v in self._values]
