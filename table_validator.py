# table_validator.py
import math
import numbers
from typing import Any, Dict, List, Optional, Union
import numpy as np

from table_config import (TableConfig, Mode, WIDTH_DTYPES, ENTRY_TYPE_WIDTHS,
                          max_for_width, entry_type_name)
from table_errors import (NonPositiveExponent, NonFiniteExponent, TableTooSmall,
                          UnsupportedTargetWidth, OutputCeilingOverflow,
                          NegativeOutputCeiling, InvalidParameterType)

MIN_TABLE_SIZE = 3
SUPPORTED_ENTRY_TYPES = ', '.join(ENTRY_TYPE_WIDTHS)


class ParameterValidator:
    """
    参数校验模块
    在任何浮点运算之前检查参数，通过后构造 TableConfig。
    检查顺序: gamma -> size -> entry_type -> max_value，遇到第一个错误立即抛出。
    """

    def validate(self, exponent: float, size: int,
                 output_ceiling: Optional[int] = None,
                 target_width: Union[int, str, np.dtype] = 8,
                 mode: Union[Mode, str] = Mode.ENCODE,
                 name: Optional[str] = None) -> TableConfig:
        """
        校验一组参数。

        Args:
            exponent: gamma 值，必须为有限正数。
            size: 表项数量，至少为 3。
            output_ceiling: 表项最大值，默认 size - 1。
            target_width: 8/16/32/64，或 'u8' 之类的类型名，或 numpy 无符号类型。
            mode: Mode.ENCODE / Mode.DECODE 或对应的字符串。
            name: 表名 (可选，只在输出源码时使用)。

        Returns:
            校验通过的 TableConfig。
        """
        # 1. gamma
        if isinstance(exponent, bool) or not isinstance(exponent, numbers.Real):
            raise InvalidParameterType('gamma', exponent, 'a real number')
        try:
            exponent = float(exponent)
        except OverflowError:
            # 超出 double 范围的整数 (例如 10**400)
            if exponent < 0:
                raise NonPositiveExponent(exponent) from None
            raise NonFiniteExponent(exponent) from None
        # NaN 也不满足 > 0
        if not exponent > 0:
            raise NonPositiveExponent(exponent)
        if not math.isfinite(exponent):
            raise NonFiniteExponent(exponent)

        # 2. size
        size = self._require_int('size', size)
        if size < MIN_TABLE_SIZE:
            raise TableTooSmall(size, MIN_TABLE_SIZE)

        # 3. entry_type
        width = self._resolve_width(target_width)

        # 4. max_value (Python int 比较，不会截断)
        if output_ceiling is None:
            output_ceiling = size - 1
        output_ceiling = self._require_int('max_value', output_ceiling)
        if output_ceiling < 0:
            raise NegativeOutputCeiling(output_ceiling)
        type_max = max_for_width(width)
        if output_ceiling > type_max:
            raise OutputCeilingOverflow(output_ceiling, type_max, entry_type_name(width))

        mode = self._resolve_mode(mode)
        if name is not None and (not isinstance(name, str) or not name.isidentifier()):
            raise InvalidParameterType('name', name, 'an identifier')

        return TableConfig(exponent=exponent, size=size, output_ceiling=output_ceiling,
                           target_width=width, mode=mode, name=name)

    def validate_block(self, params: Dict[str, Any]) -> TableConfig:
        """
        校验参数块解析出的字典。
        键名: name, entry_type, gamma, size, max_value (可选), decoding (可选)
        """
        mode = Mode.DECODE if params.get('decoding', False) else Mode.ENCODE
        return self.validate(
            exponent=params['gamma'],
            size=params['size'],
            output_ceiling=params.get('max_value'),
            target_width=params['entry_type'],
            mode=mode,
            name=params.get('name'),
        )

    def execute(self, blocks: List[Dict[str, Any]]) -> List[TableConfig]:
        """
        管道入口：校验 ParamsLoader 输出的所有参数块。

        Args:
            blocks: 参数字典列表。

        Returns:
            TableConfig 列表，顺序与输入一致。
        """
        print(f"Executing Parameter Validation for {len(blocks)} table(s)")
        return [self.validate_block(params) for params in blocks]

    @staticmethod
    def _require_int(field: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidParameterType(field, value, 'an integer')
        return int(value)

    @staticmethod
    def _resolve_width(target_width: Any) -> int:
        if isinstance(target_width, str):
            width = ENTRY_TYPE_WIDTHS.get(target_width)
            if width is None:
                raise UnsupportedTargetWidth(target_width, SUPPORTED_ENTRY_TYPES)
            return width

        if isinstance(target_width, (type, np.dtype)):
            try:
                dtype = np.dtype(target_width)
            except TypeError:
                raise UnsupportedTargetWidth(target_width, SUPPORTED_ENTRY_TYPES)
            width = dtype.itemsize * 8
            if dtype.kind != 'u' or width not in WIDTH_DTYPES:
                raise UnsupportedTargetWidth(dtype.name, SUPPORTED_ENTRY_TYPES)
            return width

        if isinstance(target_width, numbers.Integral) and not isinstance(target_width, bool):
            if int(target_width) in WIDTH_DTYPES:
                return int(target_width)
        raise UnsupportedTargetWidth(target_width, SUPPORTED_ENTRY_TYPES)

    @staticmethod
    def _resolve_mode(mode: Any) -> Mode:
        if isinstance(mode, Mode):
            return mode
        if isinstance(mode, str):
            try:
                return Mode(mode.lower())
            except ValueError:
                pass
        raise InvalidParameterType('mode', mode, "'encode' or 'decode'")
