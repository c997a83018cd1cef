"""
构建钩子、补丁流程与 CLI 共享的轻量类型定义。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Platform(Enum):
    """导出目标平台。"""

    IOS = "ios"
    ANDROID = "android"
    STANDALONE = "standalone"
    OTHER = "other"

    @classmethod
    def parse(cls, name: str) -> Platform:
        """将命令行/构建系统传入的平台名称（不区分大小写）转换为枚举值。"""
        v = name.strip().lower()
        if v in ("ios", "iphone"):
            return cls.IOS
        for item in cls:
            if item.value == v:
                return item
        raise ValueError(f"unknown platform: {name}")


class InvocationSource(Enum):
    """触发后处理的入口：本地编辑器构建或云构建。"""

    EDITOR = "editor"
    CLOUD = "cloud"


class SourceTree(Enum):
    """Xcode 文件引用的 `sourceTree` 取值。"""

    ABSOLUTE = "<absolute>"
    GROUP = "<group>"
    SOURCE = "SOURCE_ROOT"
    BUILD = "BUILT_PRODUCTS_DIR"
    DEVELOPER = "DEVELOPER_DIR"
    SDK = "SDKROOT"


@dataclass(frozen=True)
class BuildContext:
    """一次构建钩子调用的只读上下文。"""

    platform: Platform
    export_path: str
    active_scene_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileSpec:
    """需要加入工程并参与目标构建的文件。"""

    # `source_path`：写入文件引用的 `path`（相对 `source_tree`）。
    # `project_path`：在 Xcode 分组树中的位置，例如 `Frameworks/TestLib.bundle`。
    source_path: str
    project_path: str
    source_tree: SourceTree = SourceTree.SOURCE
    # 非空时先把该路径拷贝到 `<export>/<source_path>`（覆盖已有内容）。
    copy_from: str | None = None


@dataclass(frozen=True)
class FrameworkSpec:
    """系统框架引用。"""

    name: str
    weak: bool = False


@dataclass(frozen=True)
class PostExportSettings:
    """导出后补丁的显式参数集合，按字段顺序依次应用。"""

    configuration: str = "Debug"
    target_name: str = "Unity-iPhone"
    files: tuple[FileSpec, ...] = ()
    frameworks: tuple[FrameworkSpec, ...] = ()
    set_properties: tuple[tuple[str, str], ...] = ()
    add_properties: tuple[tuple[str, str], ...] = ()
