"""
补丁流程的异常类型。

所有异常都继承自 `PatchError`，CLI 统一捕获后转为带 `Error:` 前缀的退出信息。
"""

from __future__ import annotations


class PatchError(RuntimeError):
    """导出后补丁失败的基类。"""


class NotFoundError(PatchError):
    """文件或构建目标不存在。"""


class MalformedError(PatchError):
    """scheme XML 或工程描述文件无法解析。"""


class IOFailureError(PatchError):
    """读写文件失败（文件缺失除外）。"""
