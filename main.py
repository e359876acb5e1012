# main.py
# 批量生成查找表：读取文件夹中的所有参数块文件，每个文件输出一份源码。

import argparse
import glob
import os
import sys
from tqdm import tqdm

# 导入管道和模块
from table_pipeline import TablePipeline
from params_loader import ParamsLoader
from table_validator import ParameterValidator
from curve_evaluator import CurveEvaluator
from table_emitter import TableEmitter, LANGUAGES

# --- 默认配置 ---
INPUT_FOLDER = 'tables'          # 存放参数块文件 (*.gamma) 的文件夹
OUTPUT_FOLDER = 'generated'      # 存放生成源码的文件夹
INPUT_PATTERN = '*.gamma'
LANGUAGE = 'rust'
PER_LINE = 10

OUTPUT_EXTENSIONS = {
    'rust': '.rs',
    'c': '.h',
    'python': '.py',
}


def build_pipeline() -> TablePipeline:
    return TablePipeline(modules=[
        ParamsLoader(),
        ParameterValidator(),
        CurveEvaluator(),
        TableEmitter(),
    ])


def main_batch(input_folder: str = INPUT_FOLDER, output_folder: str = OUTPUT_FOLDER,
               language: str = LANGUAGE, per_line: int = PER_LINE) -> int:
    """
    处理 input_folder 中的所有参数块文件。

    Returns:
        处理失败的文件数量。
    """
    params_files = sorted(glob.glob(os.path.join(input_folder, INPUT_PATTERN)))
    if not params_files:
        print(f"在文件夹 '{input_folder}' 中没有找到 {INPUT_PATTERN} 文件。")
        return 0

    print(f"找到 {len(params_files)} 个参数块文件进行处理。")
    os.makedirs(output_folder, exist_ok=True)

    pipeline = build_pipeline()
    processing_params = {
        'tableemitter': {'language': language, 'per_line': per_line},
    }

    failures = 0
    for params_file_path in tqdm(params_files, desc="Generating gamma tables"):
        try:
            output = pipeline.process(params_file_path, params=processing_params)

            stem = os.path.splitext(os.path.basename(params_file_path))[0]
            output_path = os.path.join(output_folder, stem + OUTPUT_EXTENSIONS[language])

            # 内容没有变化时不重写，避免触发不必要的重新编译
            try:
                with open(output_path, 'r', encoding='utf-8') as f:
                    content = f.read()
            except OSError:
                content = None
            if output != content:
                with open(output_path, 'w', encoding='utf-8') as f:
                    f.write(output)

        except Exception as e:
            print(f"处理文件 {params_file_path} 时出错: {e}")
            failures += 1
            continue

    print(f"\n✅ 处理完毕: {len(params_files) - failures} 成功, {failures} 失败，输出保存至 '{output_folder}'。")
    return failures


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate gamma lookup tables from parameter blocks.")
    parser.add_argument('input_folder', nargs='?', default=INPUT_FOLDER)
    parser.add_argument('output_folder', nargs='?', default=OUTPUT_FOLDER)
    parser.add_argument('--language', choices=LANGUAGES, default=LANGUAGE)
    parser.add_argument('--per-line', type=int, default=PER_LINE)
    opts = parser.parse_args(argv)

    failures = main_batch(opts.input_folder, opts.output_folder, opts.language, opts.per_line)
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
