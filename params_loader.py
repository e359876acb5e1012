# params_loader.py
import os
import re
from typing import Any, Callable, Dict, List, Tuple

from table_errors import TableParamsError

# 参数名 -> (是否必需, 字面量类型)
PARAMETERS = {
    'name': (True, 'ident'),
    'entry_type': (True, 'ident'),
    'gamma': (True, 'float'),
    'size': (True, 'int'),
    'max_value': (False, 'int'),
    'decoding': (False, 'bool'),
}

_COMMENT_RE = re.compile(r'(//|#)[^\n]*')
_BLOCK_RE = re.compile(r'gamma_table!\s*\{(?P<body>[^{}]*)\}', re.DOTALL)
_KEY_RE = re.compile(r'(?P<key>[A-Za-z_]\w*)\s*:[ \t]*')
_VALUE_RE = re.compile(r'[^,\n]*')
_SEPARATOR_RE = re.compile(r'[\s,]*')

_IDENT_RE = re.compile(r'[A-Za-z_]\w*\Z')
_FLOAT_RE = re.compile(r'-?\d[\d_]*(\.\d[\d_]*([eE][+-]?\d+)?|\.|[eE][+-]?\d+)\Z')
_INT_RE = re.compile(r'-?\d[\d_]*\Z')


def _parse_ident(text: str) -> str:
    if not _IDENT_RE.match(text):
        raise ValueError('an identifier')
    return text


def _parse_float(text: str) -> float:
    if not _FLOAT_RE.match(text):
        raise ValueError('a float literal (e.g. 2.2)')
    return float(text.replace('_', ''))


def _parse_int(text: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError('an integer literal')
    return int(text.replace('_', ''))


def _parse_bool(text: str) -> bool:
    if text not in ('true', 'false'):
        raise ValueError('true or false')
    return text == 'true'


LITERAL_PARSERS: Dict[str, Callable[[str], Any]] = {
    'ident': _parse_ident,
    'float': _parse_float,
    'int': _parse_int,
    'bool': _parse_bool,
}


def _line_of(text: str, offset: int) -> int:
    return text.count('\n', 0, offset) + 1


def _parse_body(text: str, start: int, end: int) -> Dict[str, Any]:
    """解析 text[start:end] 中的一组 key: value，返回参数字典。"""
    params: Dict[str, Any] = {}
    pos = _SEPARATOR_RE.match(text, start, end).end()

    while pos < end:
        key_match = _KEY_RE.match(text, pos, end)
        if key_match is None:
            raise TableParamsError(f"Expected 'parameter: value', found {text[pos:end].split()[0]!r}",
                                   _line_of(text, pos))
        key = key_match.group('key')
        if key not in PARAMETERS:
            raise TableParamsError(f"Unknown parameter: {key}", _line_of(text, pos))
        if key in params:
            raise TableParamsError(f"Duplicate parameter: {key}", _line_of(text, pos))

        value_match = _VALUE_RE.match(text, key_match.end(), end)
        raw_value = value_match.group().strip()
        _, kind = PARAMETERS[key]
        try:
            params[key] = LITERAL_PARSERS[kind](raw_value)
        except ValueError as e:
            raise TableParamsError(f"Parameter '{key}' expects {e}, got {raw_value!r}",
                                   _line_of(text, pos)) from None

        pos = _SEPARATOR_RE.match(text, value_match.end(), end).end()

    for key, (required, _) in PARAMETERS.items():
        if required and key not in params:
            raise TableParamsError(f"Missing required parameter: {key}", _line_of(text, start))
    return params


def parse_table_params(text: str) -> List[Dict[str, Any]]:
    """
    解析参数块文本。

    文本可以是单个裸参数块:
        name: GAMMA_TABLE_22, entry_type: u8, gamma: 2.2, size: 256

    也可以包含多个 gamma_table! { ... } 块。'//' 和 '#' 之后为注释。

    Returns:
        参数字典列表，每个块一个。
    """
    # 注释替换为等长空格，保证行号不变
    text = _COMMENT_RE.sub(lambda m: ' ' * len(m.group()), text)

    spans: List[Tuple[int, int]] = [m.span('body') for m in _BLOCK_RE.finditer(text)]
    if not spans:
        if 'gamma_table!' in text:
            raise TableParamsError("Unterminated gamma_table! block", _line_of(text, text.index('gamma_table!')))
        if not text.strip():
            raise TableParamsError("No parameters found")
        spans = [(0, len(text))]

    return [_parse_body(text, start, end) for start, end in spans]


class ParamsLoader:
    """
    管道的第一个模块：读取参数块文件，把文件路径转换为参数字典列表。
    """
    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def execute(self, params_file_path: str, **kwargs) -> List[Dict[str, Any]]:
        """
        执行加载操作。

        Args:
            params_file_path: 参数块文件路径 (字符串)

        Returns:
            参数字典列表
        """
        if os.path.getsize(params_file_path) == 0:
            print(f"警告: 文件 '{params_file_path}' 为空。")

        with open(params_file_path, 'r', encoding=self.encoding) as f:
            text = f.read()

        try:
            blocks = parse_table_params(text)
        except TableParamsError as e:
            print(f"错误: 无法解析文件 '{params_file_path}'")
            raise e

        print(f"--- ParamsLoader: 读取到 {len(blocks)} 个参数块 ---")
        return blocks
