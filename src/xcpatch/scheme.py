"""
`.xcscheme` 修改：强制 `LaunchAction` 使用指定构建配置。
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .errors import MalformedError
from .export_layout import read_text, write_text


def _parse(scheme_path: str) -> ET.ElementTree:
    text = read_text(scheme_path)
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedError(f"invalid scheme xml {scheme_path}: {e}") from e
    return ET.ElementTree(root)


def patch_scheme(scheme_path: str, configuration: str) -> int:
    """
    将所有 `LaunchAction` 的 `buildConfiguration` 设置为 `configuration` 并写回原文件。

    返回修改的元素个数；没有 `LaunchAction` 时返回 0，文件仍会重新写出。
    配置名不会与工程的配置列表做校验。
    """
    tree = _parse(scheme_path)
    count = 0
    for element in tree.iter("LaunchAction"):
        element.set("buildConfiguration", configuration)
        count += 1

    text = ET.tostring(tree.getroot(), encoding="unicode")
    write_text(scheme_path, '<?xml version="1.0" encoding="UTF-8"?>\n' + text + "\n")
    return count


def launch_configurations(scheme_path: str) -> list[str]:
    """按文档顺序返回各 `LaunchAction` 的构建配置（缺失时为空串）。"""
    tree = _parse(scheme_path)
    return [e.get("buildConfiguration", "") for e in tree.iter("LaunchAction")]
