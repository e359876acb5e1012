# gamma_table.py
from typing import List, Optional, Union
import numpy as np

from table_config import GammaTable, Mode
from table_validator import ParameterValidator
from curve_evaluator import CurveEvaluator
from params_loader import parse_table_params

_validator = ParameterValidator()
_evaluator = CurveEvaluator()


def generate(exponent: float, size: int,
             output_ceiling: Optional[int] = None,
             target_width: Union[int, str, np.dtype] = 8,
             mode: Union[Mode, str] = Mode.ENCODE,
             name: Optional[str] = None) -> GammaTable:
    """
    生成一张 gamma 查找表：先校验，后计算。

    校验失败时抛出 table_errors 中对应的异常，不会进入计算步骤。

    Example:
        >>> table = generate(2.2, 256, 255)
        >>> int(table[0]), int(table[255])
        (0, 255)
    """
    config = _validator.validate(exponent, size, output_ceiling, target_width, mode, name)
    return _evaluator.evaluate(config)


def generate_from_block(text: str) -> List[GammaTable]:
    """解析参数块文本并为每个块生成查找表。"""
    return [_evaluator.evaluate(_validator.validate_block(params))
            for params in parse_table_params(text)]
