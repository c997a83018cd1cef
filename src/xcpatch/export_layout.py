"""
Unity iOS 导出目录的约定路径与文件读写。

读写失败统一转换为 `errors` 中的异常类型；写入不是原子操作。
"""

from __future__ import annotations

import os
import shutil

from .errors import IOFailureError, NotFoundError

PROJECT_DIR = "Unity-iPhone.xcodeproj"
SCHEME_NAME = "Unity-iPhone"


def scheme_path(export_path: str) -> str:
    """共享 scheme 文件路径。"""
    return os.path.join(
        export_path, PROJECT_DIR, "xcshareddata", "xcschemes", f"{SCHEME_NAME}.xcscheme"
    )


def pbxproj_path(export_path: str) -> str:
    """工程描述文件 `project.pbxproj` 路径。"""
    return os.path.join(export_path, PROJECT_DIR, "project.pbxproj")


def read_text(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError as e:
        raise NotFoundError(f"file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailureError(f"failed to read {path}: {e}") from e


def write_text(path: str, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise IOFailureError(f"failed to write {path}: {e}") from e


def copy_and_replace(src: str, dst: str) -> None:
    """用 `src` 覆盖 `dst`：先删除已有目标，再拷贝目录树或单个文件。"""
    if not os.path.exists(src):
        raise NotFoundError(f"copy source not found: {src}")
    try:
        if os.path.isdir(dst) and not os.path.islink(dst):
            shutil.rmtree(dst)
        elif os.path.lexists(dst):
            os.remove(dst)
        parent = os.path.dirname(dst)
        if parent:
            os.makedirs(parent, exist_ok=True)
        if os.path.isdir(src):
            shutil.copytree(src, dst, symlinks=True)
        else:
            shutil.copy2(src, dst)
    except OSError as e:
        raise IOFailureError(f"failed to copy {src} -> {dst}: {e}") from e
