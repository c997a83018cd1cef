"""
`xcpatch` 的命令行入口模块。

负责收集导出目录、启用场景与补丁参数，并调用 `xcpatch.postprocess` 中的构建钩子。
"""

import argparse
import os
from collections.abc import Sequence

from .errors import PatchError
from .postprocess import _log_step, on_post_export, on_pre_export
from .scene_gate import load_enabled_scenes
from .types import FileSpec, FrameworkSpec, InvocationSource, Platform, PostExportSettings

DEFAULT_BUILD_SETTINGS = os.path.join("ProjectSettings", "EditorBuildSettings.asset")


def _split_pair(spec: str, flag: str) -> tuple[str, str]:
    """将 `KEY=VALUE` 形式的参数拆分为二元组。"""
    if "=" not in spec:
        raise SystemExit(f"Error: expected KEY=VALUE for {flag}, got: {spec}")
    k, v = spec.split("=", 1)
    if not k:
        raise SystemExit(f"Error: empty KEY in {flag}: {spec}")
    return k, v


def _parse_files(ns: argparse.Namespace) -> tuple[FileSpec, ...]:
    """把 `--add-file` / `--copy-file` 整理成 `FileSpec` 序列。"""
    copies: dict[str, str] = {}
    for spec in ns.copy_file:
        src, dst = _split_pair(spec, "--copy-file")
        copies[dst] = src

    files: list[FileSpec] = []
    for spec in ns.add_file:
        src, project_path = _split_pair(spec, "--add-file")
        files.append(
            FileSpec(source_path=src, project_path=project_path, copy_from=copies.pop(src, None))
        )

    if copies:
        orphan = ", ".join(sorted(copies))
        raise SystemExit(f"Error: --copy-file target not added with --add-file: {orphan}")
    return tuple(files)


def _parse_settings(ns: argparse.Namespace) -> PostExportSettings:
    """把 argparse 命名空间整理成不可变的 `PostExportSettings`。"""
    frameworks = [FrameworkSpec(name=n) for n in ns.framework]
    frameworks += [FrameworkSpec(name=n, weak=True) for n in ns.weak_framework]
    return PostExportSettings(
        configuration=ns.configuration,
        files=_parse_files(ns),
        frameworks=tuple(frameworks),
        set_properties=tuple(_split_pair(s, "--set-property") for s in ns.set_property),
        add_properties=tuple(_split_pair(s, "--add-property") for s in ns.add_property),
    )


def _resolve_scenes(ns: argparse.Namespace) -> list[str]:
    """确定启用场景列表：显式 `--scene` 优先，其次构建设置文件。"""
    if ns.scene:
        return list(ns.scene)

    path = ns.editor_build_settings
    if not path:
        if not os.path.isfile(DEFAULT_BUILD_SETTINGS):
            _log_step("No --scene given and no build settings found; no scenes enabled")
            return []
        path = DEFAULT_BUILD_SETTINGS
    path = os.path.abspath(os.path.expanduser(path))
    scenes = load_enabled_scenes(path)
    _log_step(f"Enabled scenes from {path}: {len(scenes)}")
    return scenes


def build_parser() -> argparse.ArgumentParser:
    """构建并返回 `xcpatch` 命令行参数解析器。"""
    p = argparse.ArgumentParser(
        prog="xcpatch",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "Patch a Unity iOS Xcode export after it is generated.\n"
            "Forces the scheme launch configuration and optionally injects files,\n"
            "frameworks and build settings into Unity-iPhone.xcodeproj/project.pbxproj."
        ),
    )

    p.add_argument(
        "-e",
        "--export-path",
        default="",
        help="Xcode export directory containing Unity-iPhone.xcodeproj (default: cwd)",
    )
    p.add_argument(
        "--source",
        choices=[s.value for s in InvocationSource],
        default=InvocationSource.EDITOR.value,
        help="Which build hook triggered the run (default: editor)",
    )
    p.add_argument("--platform", default="ios", help="Build target platform (default: ios)")
    p.add_argument(
        "--pre-export",
        action="store_true",
        help="Run the pre-export hook instead of post-export (no modifications)",
    )
    p.add_argument(
        "--scene",
        action="append",
        default=[],
        metavar="PATH",
        help="Enabled scene path, repeatable (overrides --editor-build-settings)",
    )
    p.add_argument(
        "--editor-build-settings",
        default="",
        metavar="FILE",
        help=f"Unity build settings asset to read enabled scenes from\n(default: {DEFAULT_BUILD_SETTINGS} if present)",
    )
    p.add_argument(
        "-c",
        "--configuration",
        default="Debug",
        help="Build configuration for the scheme LaunchAction (default: Debug)",
    )
    p.add_argument(
        "--add-file",
        action="append",
        default=[],
        metavar="SRC=PROJECT_PATH",
        help="Add file reference SRC (relative to SOURCE_ROOT) at group path PROJECT_PATH",
    )
    p.add_argument(
        "--copy-file",
        action="append",
        default=[],
        metavar="FROM=SRC",
        help="Copy FROM into <export>/SRC (replacing it) before adding SRC",
    )
    p.add_argument("--framework", action="append", default=[], metavar="NAME",
                   help="Link a system framework, e.g. AssetsLibrary.framework")
    p.add_argument("--weak-framework", action="append", default=[], metavar="NAME",
                   help="Weak-link a system framework")
    p.add_argument("--set-property", action="append", default=[], metavar="KEY=VALUE",
                   help="Set a build setting on the target (overwrite)")
    p.add_argument("--add-property", action="append", default=[], metavar="KEY=VALUE",
                   help="Append a value to a build setting on the target")
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 入口：解析参数并调用导出前/导出后钩子。"""
    parser = build_parser()
    ns = parser.parse_args(argv)

    try:
        platform = Platform.parse(ns.platform)
    except ValueError as e:
        raise SystemExit(f"Error: {e}") from e
    source = InvocationSource(ns.source)
    export_path = os.path.abspath(os.path.expanduser(ns.export_path or os.getcwd()))
    if not os.path.isdir(export_path):
        raise SystemExit(f"Error: export path not found: {export_path}")

    if ns.pre_export:
        on_pre_export(source, export_path, platform=platform)
        return 0

    settings = _parse_settings(ns)
    try:
        scenes = _resolve_scenes(ns)
        applied = on_post_export(
            source,
            export_path,
            scenes,
            platform=platform,
            settings=settings,
            verbose=bool(ns.verbose),
        )
    except PatchError as e:
        raise SystemExit(f"Error: {e}") from e

    _log_step("Post-export patch applied" if applied else "Post-export patch skipped")
    return 0
