# table_emitter.py
from typing import List, Union

from table_config import GammaTable, Mode, entry_type_name

DEFAULT_TABLE_NAME = 'GAMMA_TABLE'
INDENT = ' ' * 4

C_TYPES = {8: 'uint8_t', 16: 'uint16_t', 32: 'uint32_t', 64: 'uint64_t'}
# 超过 INT64_MAX 的十进制常量在 C 中没有类型，u64 表项统一加后缀
C_SUFFIXES = {64: 'ULL'}

LANGUAGES = ('rust', 'c', 'python')


class TableEmitter:
    """
    输出模块：把 GammaTable 渲染为静态数组源码。
    支持 'rust' (const 数组), 'c' (stdint 数组), 'python' (list 常量)。
    """

    def _format_rows(self, table: GammaTable, per_line: int, suffix: str = '') -> List[str]:
        values = table.tolist()
        w = len(str(max(values)))
        rows = []
        for i in range(0, len(values), per_line):
            chunk = values[i:i + per_line]
            rows.append(INDENT + ' '.join(f"{v:{w}d}{suffix}," for v in chunk))
        return rows

    def _describe(self, table: GammaTable) -> str:
        config = table.config
        direction = 'x^(1/gamma)' if config.mode is Mode.DECODE else 'x^gamma'
        return (f"gamma {config.exponent}, {direction}, size {config.size}, "
                f"max_value {config.output_ceiling}")

    def render(self, table: GammaTable, language: str = 'rust', per_line: int = 10) -> str:
        """
        渲染单张表。

        Args:
            table: CurveEvaluator 的输出。
            language: 'rust', 'c' 或 'python'。
            per_line: 每行输出的数值个数。

        Returns:
            源码文本 (以换行结尾)。
        """
        if per_line < 1:
            raise ValueError(f"per_line must be at least 1, got {per_line}")
        name = table.name or DEFAULT_TABLE_NAME
        suffix = C_SUFFIXES.get(table.config.target_width, '') if language == 'c' else ''
        rows = '\n'.join(self._format_rows(table, per_line, suffix))
        size = len(table)

        if language == 'rust':
            return (f"// {self._describe(table)}\n"
                    f"const {name}: [{entry_type_name(table.config.target_width)}; {size}] = [\n"
                    f"{rows}\n];\n")
        elif language == 'c':
            return (f"/* {self._describe(table)} */\n"
                    f"const {C_TYPES[table.config.target_width]} {name}[{size}] = {{\n"
                    f"{rows}\n}};\n")
        elif language == 'python':
            return (f"# {self._describe(table)}\n"
                    f"{name} = [\n{rows}\n]\n")
        else:
            raise ValueError(f"Unknown output language: {language}")

    def execute(self, tables: Union[GammaTable, List[GammaTable]],
                language: str = 'rust', per_line: int = 10) -> str:
        """
        管道最后一步：把所有表渲染到同一段源码里。

        Args:
            tables: 单张表或表的列表。
            language: 'rust', 'c' 或 'python'。
            per_line: 每行输出的数值个数。

        Returns:
            完整的源码文本。
        """
        if isinstance(tables, GammaTable):
            tables = [tables]
        print(f"Executing Table Emission ({language}) for {len(tables)} table(s)")

        if language == 'rust':
            header = "// Gamma lookup tables\n// Automatically generated, do not edit\n"
        elif language == 'c':
            header = "/* Gamma lookup tables */\n/* Automatically generated, do not edit */\n\n#include <stdint.h>\n"
        elif language == 'python':
            header = "# Gamma lookup tables\n# Automatically generated, do not edit\n"
        else:
            raise ValueError(f"Unknown output language: {language}")

        parts = [header]
        for table in tables:
            parts.append(self.render(table, language, per_line))
        return '\n'.join(parts)
