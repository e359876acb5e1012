# table_pipeline.py
from typing import List, Any, Dict

from table_errors import TableError, PipelineStageError


class TablePipeline:
    """
    查找表生成管道: ParamsLoader -> ParameterValidator -> CurveEvaluator -> TableEmitter
    每个模块的 `execute` 接收上一个模块的输出。
    """
    def __init__(self, modules: List[Any]):
        """
        Args:
            modules: 处理模块实例列表，每个模块必须有 `execute` 方法，
                     且类名 (小写) 不能重复，参数字典按类名分发。
        """
        names = []
        for module in modules:
            if not callable(getattr(module, 'execute', None)):
                raise TypeError(f"模块 {module.__class__.__name__} 没有 execute 方法")
            names.append(self.stage_name(module))
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"管道中存在重复的模块: {', '.join(duplicates)}")

        self.modules = modules
        self.stage_names = names

    @staticmethod
    def stage_name(module: Any) -> str:
        return module.__class__.__name__.lower()

    def process(self, params_file_path: str, params: Dict[str, Any] = None) -> Any:
        """
        处理一个参数块文件。

        Args:
            params_file_path: 参数块文件的路径，作为第一个模块的输入。
            params: {模块类名(小写): execute 的关键字参数}，
                    例如 {'tableemitter': {'language': 'c', 'per_line': 8}}

        Returns:
            最后一个模块的输出 (通常是生成的源码文本)。

        Raises:
            ValueError: params 中有不属于任何模块的键 (通常是拼写错误)。
            PipelineStageError: 某个模块抛出 TableError，异常中带有模块名和文件名。
        """
        if params is None:
            params = {}
        unknown = sorted(set(params) - set(self.stage_names))
        if unknown:
            raise ValueError(f"Unknown pipeline stage(s) in params: {', '.join(unknown)}. "
                             f"Stages are: {', '.join(self.stage_names)}")

        print(f"--- Table Pipeline Start: {params_file_path} ---")

        processed_data = params_file_path
        for module, stage in zip(self.modules, self.stage_names):
            try:
                processed_data = module.execute(processed_data, **params.get(stage, {}))
            except TableError as e:
                raise PipelineStageError(stage, params_file_path, e) from e

        print("--- Table Pipeline Finished ---")
        return processed_data
