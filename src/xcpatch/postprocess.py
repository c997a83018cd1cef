"""
Unity iOS 导出后处理流程。

两个入口（本地编辑器构建完成、云构建完成）统一整理为 `BuildContext`，
再调用同一个 `process_post_build`：

1) 场景门控：仅当 `REQUIRED_SCENE` 处于启用状态且平台为 iOS 时继续。
2) 修改共享 scheme，强制 `LaunchAction` 的构建配置。
3) 读取 `project.pbxproj`：拷贝文件、添加文件引用、系统框架、构建设置，然后写回。

任何一步失败都会中止后续步骤；已写回的文件不会回滚。
"""

from __future__ import annotations

import os
from collections.abc import Sequence

from .export_layout import copy_and_replace, pbxproj_path, scheme_path
from .project import load_project, save_project
from .scene_gate import is_eligible
from .scheme import launch_configurations, patch_scheme
from .types import BuildContext, InvocationSource, Platform, PostExportSettings

REQUIRED_SCENE = "Assets/Scenes/CounterScene.unity"
REQUIRED_PLATFORM = Platform.IOS
TARGET_NAME = "Unity-iPhone"

_BANNER_PREFIX = {
    InvocationSource.CLOUD: "[UCB]",
    InvocationSource.EDITOR: "[Editor]",
}


def _log_step(message: str) -> None:
    """输出简洁的流程阶段提示。"""
    print(f"[xcpatch] {message}")


def _resolve_platform(source: InvocationSource, platform: Platform | None) -> Platform:
    # 云构建的导出方法只拿到导出路径，且只配置在 iOS 目标上。
    if source is InvocationSource.CLOUD:
        return platform or Platform.IOS
    if platform is None:
        raise ValueError("editor invocation requires an explicit platform")
    return platform


def process_post_build(
    context: BuildContext,
    settings: PostExportSettings | None = None,
    *,
    verbose: bool = False,
) -> bool:
    """执行导出后补丁；未通过门控时返回 False，不做任何修改。"""
    settings = settings or PostExportSettings(target_name=TARGET_NAME)

    if context.platform is not REQUIRED_PLATFORM:
        _log_step(f"Skipping: platform is {context.platform.value}, not {REQUIRED_PLATFORM.value}")
        return False
    if not is_eligible(context.active_scene_paths, REQUIRED_SCENE):
        _log_step(f"Skipping: scene not enabled in build: {REQUIRED_SCENE}")
        return False

    path = scheme_path(context.export_path)
    _log_step(f"Loaded scheme file: {path}")
    count = patch_scheme(path, settings.configuration)
    if count:
        _log_step(f"Set launch configuration to {settings.configuration} ({count} LaunchAction)")
    else:
        _log_step("No LaunchAction found in scheme")
    if verbose:
        print(f"  LaunchAction configurations: {launch_configurations(path)}")
    _log_step(f"Saved scheme file: {path}")

    proj_path = pbxproj_path(context.export_path)
    desc = load_project(proj_path)
    target = desc.resolve_target_by_name(settings.target_name)
    if verbose:
        print(f"  Target {settings.target_name}: {target.get_id()}")

    for spec in settings.files:
        if spec.copy_from:
            dst = os.path.join(context.export_path, spec.source_path)
            copy_and_replace(spec.copy_from, dst)
            if verbose:
                print(f"  Copied: {spec.copy_from} -> {dst}")
        desc.add_file_reference(target, spec.source_path, spec.project_path, spec.source_tree)
        _log_step(f"Added file: {spec.project_path}")

    for fw in settings.frameworks:
        desc.add_framework_reference(target, fw.name, fw.weak)
        suffix = " (weak)" if fw.weak else ""
        _log_step(f"Linked framework: {fw.name}{suffix}")

    for key, value in settings.set_properties:
        desc.set_build_property(target, key, value)
        _log_step(f"Set build property: {key} = {value}")

    for key, value in settings.add_properties:
        desc.add_build_property(target, key, value)
        _log_step(f"Added build property: {key} += {value}")

    save_project(proj_path, desc)
    _log_step(f"Saved project file: {proj_path}")
    return True


def on_post_export(
    source: InvocationSource,
    export_path: str,
    active_scene_paths: Sequence[str],
    *,
    platform: Platform | None = None,
    settings: PostExportSettings | None = None,
    verbose: bool = False,
) -> bool:
    """导出完成后的统一入口，每次成功导出调用一次。"""
    if source is InvocationSource.CLOUD:
        print(f"{_BANNER_PREFIX[source]} OnPostExportIos started.")
    else:
        print(f"{_BANNER_PREFIX[source]} OnPostExportBuild started.")

    context = BuildContext(
        platform=_resolve_platform(source, platform),
        export_path=export_path,
        active_scene_paths=tuple(active_scene_paths),
    )
    return process_post_build(context, settings, verbose=verbose)


def on_pre_export(
    source: InvocationSource,
    export_path: str,
    *,
    platform: Platform | None = None,
) -> None:
    """导出前的扩展点；目前只输出日志，不做任何修改。"""
    resolved = _resolve_platform(source, platform)
    print(f"{_BANNER_PREFIX[source]} OnPreExport started ({resolved.value}): {export_path}")
