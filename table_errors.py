# table_errors.py
from typing import Any, Optional


class TableError(ValueError):
    """所有查找表相关错误的基类"""


class TableValidationError(TableError):
    """
    参数校验失败。

    Attributes:
        field: 出错的参数名 (例如 'gamma', 'size')
        value: 出错的参数值
        limit: 被违反的限制 (没有明确限制时为 None)
    """
    def __init__(self, message: str, field: str, value: Any, limit: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
        self.limit = limit


class NonPositiveExponent(TableValidationError):
    def __init__(self, value: Any):
        super().__init__(f"Gamma value must be positive, got {value}", 'gamma', value, 0)


class NonFiniteExponent(TableValidationError):
    def __init__(self, value: Any):
        super().__init__(f"Gamma value must be finite, got {value}", 'gamma', value)


class TableTooSmall(TableValidationError):
    def __init__(self, value: int, limit: int = 3):
        super().__init__(
            f"Size must be at least {limit} to create a meaningful gamma table "
            f"(got {value}). Smaller sizes only have min and max values.",
            'size', value, limit)


class UnsupportedTargetWidth(TableValidationError):
    def __init__(self, value: Any, supported: Any):
        super().__init__(
            f"Unsupported entry_type: {value}. Supported types are: {supported}",
            'entry_type', value, supported)


class OutputCeilingOverflow(TableValidationError):
    def __init__(self, value: int, limit: int, entry_type: str):
        super().__init__(
            f"max_value ({value}) exceeds the maximum value ({limit}) "
            f"that can be stored in entry_type {entry_type}",
            'max_value', value, limit)


class NegativeOutputCeiling(TableValidationError):
    def __init__(self, value: int):
        super().__init__(f"max_value must not be negative, got {value}", 'max_value', value, 0)


class InvalidParameterType(TableValidationError):
    def __init__(self, field: str, value: Any, expected: str):
        super().__init__(
            f"Parameter '{field}' expects {expected}, got {type(value).__name__} ({value!r})",
            field, value, expected)


class TableParamsError(TableError):
    """参数块 (key: value 文本) 的语法错误"""
    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class PipelineStageError(TableError):
    """
    管道中某个模块处理失败。

    Attributes:
        stage: 出错模块的名称 (小写类名)
        source: 正在处理的参数块文件
        cause: 原始异常
    """
    def __init__(self, stage: str, source: Any, cause: TableError):
        super().__init__(f"[{stage}] {source}: {cause}")
        self.stage = stage
        self.source = source
        self.cause = cause
