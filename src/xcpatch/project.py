"""
`project.pbxproj` 对象图的读取与修改。

解析、GUID 分配、分组与构建阶段的维护交给 `pbxproj`（mod-pbxproj）。
`ProjectDescriptor` 只暴露导出后补丁实际需要的操作：
- 按名称解析构建目标。
- 添加文件引用并挂到目标的构建阶段。
- 添加系统框架（按名称去重）。
- 设置/追加构建设置。
"""

from __future__ import annotations

import io
import posixpath
from typing import Any

import openstep_parser as osp
from pbxproj import PBXGenericObject, XcodeProject
from pbxproj.pbxextensions import FileOptions

from .errors import MalformedError, NotFoundError, PatchError
from .export_layout import read_text, write_text
from .types import SourceTree

# 对象中保存 GUID 引用的字段（单值或列表）。
_REF_FIELDS = (
    "buildConfigurationList",
    "buildConfigurations",
    "buildPhases",
    "children",
    "dependencies",
    "fileRef",
    "files",
    "mainGroup",
    "productRefGroup",
    "productReference",
    "target",
    "targetProxy",
    "targets",
)


def reference_name(ref: Any) -> str:
    """文件引用的显示名：优先 `name`，否则取 `path` 的最后一段。"""
    name = getattr(ref, "name", None)
    if name:
        return str(name)
    return posixpath.basename(str(getattr(ref, "path", "") or "").rstrip("/"))


def _contains_value(current: Any, value: str) -> bool:
    values = current if isinstance(current, list) else [current]
    return any(value == v or value in str(v).split() for v in values)


class ProjectDescriptor:
    """已解析的 Xcode 工程，包装 `pbxproj.XcodeProject`。"""

    def __init__(self, project: XcodeProject) -> None:
        self.project = project

    @classmethod
    def load(cls, text: str, path: str | None = None) -> ProjectDescriptor:
        """
        从文本解析工程；`path` 决定 `SOURCE_ROOT`（工程包的上一级目录）。

        无法解析、缺少 `objects` 或 `rootObject` 无法解析时抛出 `MalformedError`。
        """
        # openstep_parser 对语法错误只抛出 Exception / IndexError。
        try:
            tree = osp.OpenStepDecoder.ParseFromFile(io.StringIO(text))
        except Exception as e:
            raise MalformedError(f"invalid project file: {e}") from e
        if not isinstance(tree, dict) or not isinstance(tree.get("objects"), dict):
            raise MalformedError("invalid project file: missing objects table")
        root = tree.get("rootObject")
        if not isinstance(root, str) or not isinstance(tree["objects"].get(root), dict):
            raise MalformedError("invalid project file: rootObject does not resolve")
        return cls(XcodeProject(tree, path))

    def serialize(self) -> str:
        return repr(self.project)

    # ---- 查询 ----

    @property
    def objects(self) -> Any:
        return self.project.objects

    @property
    def root(self) -> Any:
        return self.objects[self.project.rootObject]

    def _object(self, guid: str, isa: str | None = None) -> Any:
        obj = self.objects[guid]
        if obj is None:
            raise NotFoundError(f"object not found: {guid}")
        if isa is not None and obj.isa != isa:
            raise NotFoundError(f"object {guid} is {obj.isa}, expected {isa}")
        return obj

    def all_objects(self) -> list[Any]:
        return [self.objects[key] for key in self.objects.get_keys()]

    def target_names(self) -> list[str]:
        return [t.name for t in self.objects.get_targets()]

    def resolve_target_by_name(self, name: str) -> Any:
        """返回名为 `name` 的构建目标对象，不存在时抛出 `NotFoundError`。"""
        for target in self.objects.get_targets():
            if target.name == name:
                return target
        raise NotFoundError(f"target not found: {name}")

    def find_file_reference(self, path: str, source_tree: SourceTree) -> Any | None:
        for ref in self.objects.get_objects_in_section("PBXFileReference"):
            if getattr(ref, "path", None) == path and getattr(ref, "sourceTree", None) == source_tree.value:
                return ref
        return None

    def _phase(self, target: Any, isa: str) -> Any | None:
        for guid in getattr(target, "buildPhases", None) or []:
            phase = self.objects[guid]
            if phase is not None and phase.isa == isa:
                return phase
        return None

    def phase_file_refs(self, target: Any, isa: str) -> list[str]:
        """目标某类构建阶段中各 `PBXBuildFile` 指向的文件引用 GUID。"""
        phase = self._phase(target, isa)
        if phase is None:
            return []
        out: list[str] = []
        for guid in getattr(phase, "files", None) or []:
            build_file = self.objects[guid]
            if build_file is not None and getattr(build_file, "fileRef", None):
                out.append(str(build_file.fileRef))
        return out

    def _configurations(self, target: Any, configuration: str | None) -> list[Any]:
        cfg_list = self._object(str(target.buildConfigurationList), "XCConfigurationList")
        out = []
        for guid in cfg_list.buildConfigurations:
            cfg = self._object(guid, "XCBuildConfiguration")
            if configuration is None or cfg.name == configuration:
                out.append(cfg)
        if configuration is not None and not out:
            raise NotFoundError(f"build configuration not found: {configuration}")
        return out

    def build_property(self, target: Any, key: str) -> dict[str, Any]:
        """返回目标各构建配置中 `key` 的取值：`{配置名: 值}`，未设置的配置不出现。"""
        out: dict[str, Any] = {}
        for cfg in self._configurations(target, None):
            value = getattr(getattr(cfg, "buildSettings", None), key, None)
            if value is not None:
                out[str(cfg.name)] = value
        return out

    def dangling_references(self) -> list[tuple[str, str, str]]:
        """列出所有无法解析的 GUID 引用：`(所属对象, 字段, 目标 GUID)`。"""
        out: list[tuple[str, str, str]] = []
        for obj in self.all_objects():
            for field in _REF_FIELDS:
                value = getattr(obj, field, None)
                refs = value if isinstance(value, list) else [value]
                for ref in refs:
                    if isinstance(ref, str) and self.objects[ref] is None:
                        out.append((str(obj.get_id()), field, str(ref)))
        return out

    # ---- 修改 ----

    def _ensure_group(self, group_path: str) -> Any | None:
        """按 `a/b/c` 逐级查找（或创建）分组；空路径返回 None，即主分组。"""
        group = None
        for part in group_path.split("/"):
            if part:
                group = self.project.get_or_create_group(part, parent=group)
        return group

    def _add_file(
        self, target: Any, path: str, group: Any, source_tree: SourceTree, weak: bool
    ) -> Any:
        options = FileOptions(weak=weak, embed_framework=False)
        try:
            build_files = self.project.add_file(
                path,
                parent=group,
                tree=source_tree.value,
                target_name=target.name,
                force=True,
                file_options=options,
            )
        except ValueError as e:
            raise PatchError(f"cannot add {path}: {e}") from e
        if build_files:
            return self._object(str(build_files[0].fileRef), "PBXFileReference")
        ref = self.find_file_reference(path, source_tree)
        if ref is None:
            raise PatchError(f"cannot add {path} to target {target.name}")
        return ref

    def add_file_reference(
        self,
        target: Any,
        source_path: str,
        project_path: str,
        source_tree: SourceTree = SourceTree.SOURCE,
    ) -> Any:
        """
        添加文件引用，放入 `project_path` 所指的分组并挂到目标构建阶段，返回文件引用。

        同一 `source_path` + `source_tree` 的文件引用已存在时直接复用，不再改动工程。
        """
        existing = self.find_file_reference(source_path, source_tree)
        if existing is not None:
            return existing
        group = self._ensure_group(posixpath.dirname(project_path.rstrip("/")))
        return self._add_file(target, source_path, group, source_tree, False)

    def _mark_weak(self, build_file: Any) -> None:
        settings = getattr(build_file, "settings", None)
        attrs = [str(a) for a in (getattr(settings, "ATTRIBUTES", None) or [])]
        if "Weak" in attrs:
            return
        weak = PBXGenericObject(build_file).parse({"ATTRIBUTES": attrs + ["Weak"]})
        if settings is None:
            build_file["settings"] = weak
        else:
            settings["ATTRIBUTES"] = weak.ATTRIBUTES

    def add_framework_reference(self, target: Any, name: str, weak: bool = False) -> Any:
        """
        为目标链接系统框架/库，返回文件引用。

        目标的 Frameworks 阶段中已有同名引用（按 `name` 或 `path` 末段比较）时不会重复添加；
        此时 `weak=True` 会把已有链接改为弱链接，`weak=False` 不会取消已有的弱链接。
        """
        phase = self._phase(target, "PBXFrameworksBuildPhase")
        for guid in getattr(phase, "files", None) or []:
            build_file = self.objects[guid]
            ref = self.objects[getattr(build_file, "fileRef", None)] if build_file is not None else None
            if ref is not None and reference_name(ref) == name:
                if weak:
                    self._mark_weak(build_file)
                return ref

        if name.endswith((".tbd", ".dylib")):
            path = f"usr/lib/{name}"
        else:
            path = f"System/Library/Frameworks/{name}"
        group = self.project.get_or_create_group("Frameworks")
        return self._add_file(target, path, group, SourceTree.SDK, weak)

    def set_build_property(
        self, target: Any, key: str, value: str, configuration: str | None = None
    ) -> None:
        """在目标的全部（或指定）构建配置中覆盖 `key`。"""
        for cfg in self._configurations(target, configuration):
            self.project.set_flags(key, value, target_name=target.name, configuration_name=cfg.name)

    def add_build_property(
        self, target: Any, key: str, value: str, configuration: str | None = None
    ) -> None:
        """
        向 `key` 追加一个值；单值在追加后转为列表。

        已存在的值不会重复，包括空格分隔字符串中的某一项，例如 `"$(inherited) -ObjC"`。
        """
        for cfg in self._configurations(target, configuration):
            current = getattr(getattr(cfg, "buildSettings", None), key, None)
            if current is None or current == "":
                self.project.set_flags(key, value, target_name=target.name, configuration_name=cfg.name)
            elif not _contains_value(current, value):
                self.project.add_flags(key, value, target_name=target.name, configuration_name=cfg.name)


def load_project(path: str) -> ProjectDescriptor:
    return ProjectDescriptor.load(read_text(path), path)


def save_project(path: str, desc: ProjectDescriptor) -> None:
    write_text(path, desc.serialize())
