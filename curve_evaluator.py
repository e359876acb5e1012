# curve_evaluator.py
from typing import List
import numpy as np

from table_config import TableConfig, GammaTable, Mode


class CurveEvaluator:
    """
    曲线计算模块
    对已校验的 TableConfig 在 [0, 1] 上等距采样幂函数，四舍五入并裁剪到 max_value。

    注意：本模块不重复校验参数，输入必须先经过 ParameterValidator。
    """

    def evaluate(self, config: TableConfig) -> GammaTable:
        """
        计算一张查找表。

        Args:
            config: 校验通过的配置。

        Returns:
            GammaTable，共 size 项，第一项为 0，最后一项为 output_ceiling，单调不减。
        """
        size = config.size
        ceiling = config.output_ceiling

        # 1. 归一化输入 x = i / (size - 1)，float64 精度
        x = np.arange(size, dtype=np.float64) / (size - 1)

        # 2. 幂运算: encode 用 gamma，decode 用 1/gamma
        y = np.power(x, config.effective_exponent)

        # 3. 缩放到 [0, max_value]
        raw = y * float(ceiling)

        # 4. 四舍五入 (.5 远离零)。raw - floor(raw) 对 double 是精确的
        rounded = np.floor(raw)
        rounded += (raw - rounded) >= 0.5

        # 5. 裁剪。用 Python int 比较，u64 时 float 可能舍入到 2^64
        values = [min(int(v), ceiling) for v in rounded.tolist()]
        return GammaTable(values, config)

    def execute(self, configs: List[TableConfig]) -> List[GammaTable]:
        """管道入口：依次计算每个配置对应的查找表。"""
        tables = []
        for config in configs:
            direction = 'decoding' if config.mode is Mode.DECODE else 'encoding'
            print(f"Executing Curve Evaluation ({direction}) with gamma: {config.exponent}, "
                  f"size: {config.size}, max_value: {config.output_ceiling}")
            tables.append(self.evaluate(config))
        return tables
