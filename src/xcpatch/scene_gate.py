"""
场景门控：只有指定场景处于启用状态的构建才执行导出后补丁。

启用场景列表来自 Unity 的 `ProjectSettings/EditorBuildSettings.asset`。
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import MalformedError
from .export_layout import read_text


def is_eligible(active_scene_paths: Sequence[str], required_scene_path: str) -> bool:
    """当 `required_scene_path` 出现在启用场景列表中时返回 True。"""
    return required_scene_path in active_scene_paths


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _scalar(raw: str) -> str:
    """去掉 YAML 标量两侧的引号。"""
    v = raw.strip()
    if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):
        return v[1:-1]
    return v


def parse_enabled_scenes(text: str) -> list[str]:
    """
    从 `EditorBuildSettings.asset` 文本中提取启用场景路径（保持原顺序）。

    Unity 以固定缩进的 YAML 子集写出该文件：

        m_Scenes:
        - enabled: 1
          path: Assets/Scenes/CounterScene.unity
          guid: 2cda990e2423bbf4892e6590ba056729
    """
    lines = text.splitlines()
    if not any(line.strip() == "EditorBuildSettings:" for line in lines):
        raise MalformedError("missing EditorBuildSettings section")

    start = -1
    base_indent = 0
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("m_Scenes:"):
            rest = stripped[len("m_Scenes:"):].strip()
            if rest == "[]":
                return []
            if rest:
                raise MalformedError(f"unexpected inline m_Scenes value: {rest}")
            start = i + 1
            base_indent = _indent_of(line)
            break
    if start < 0:
        raise MalformedError("missing m_Scenes list")

    entries: list[dict[str, str]] = []
    for line in lines[start:]:
        if not line.strip():
            continue
        indent = _indent_of(line)
        stripped = line.strip()
        # 列表项与 `m_Scenes:` 同缩进；遇到同级的普通键即结束。
        if indent < base_indent or (indent == base_indent and not stripped.startswith("-")):
            break
        if stripped.startswith("-"):
            entries.append({})
            stripped = stripped[1:].strip()
            if not stripped:
                continue
        if not entries or ":" not in stripped:
            raise MalformedError(f"unexpected line in m_Scenes: {line.strip()}")
        key, value = stripped.split(":", 1)
        entries[-1][key.strip()] = _scalar(value)

    return [e.get("path", "") for e in entries if e.get("enabled") == "1" and e.get("path")]


def load_enabled_scenes(path: str) -> list[str]:
    """读取构建设置文件并返回启用场景路径列表。"""
    return parse_enabled_scenes(read_text(path))
