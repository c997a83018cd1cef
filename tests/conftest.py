from pathlib import Path

import pytest

# Trimmed-down Unity iOS export: one app target, Debug/Release configurations.
PBXPROJ = """// !$*UTF8*$!
{
	archiveVersion = 1;
	classes = {
	};
	objectVersion = 46;
	objects = {

/* Begin PBXBuildFile section */
		0A1B2C3D4E5F60718293A411 /* Foundation.framework in Frameworks */ = {isa = PBXBuildFile; fileRef = 0A1B2C3D4E5F60718293A410 /* Foundation.framework */; };
		0A1B2C3D4E5F60718293A413 /* main.mm in Sources */ = {isa = PBXBuildFile; fileRef = 0A1B2C3D4E5F60718293A412 /* main.mm */; };
/* End PBXBuildFile section */

/* Begin PBXFileReference section */
		0A1B2C3D4E5F60718293A410 /* Foundation.framework */ = {isa = PBXFileReference; lastKnownFileType = wrapper.framework; name = Foundation.framework; path = System/Library/Frameworks/Foundation.framework; sourceTree = SDKROOT; };
		0A1B2C3D4E5F60718293A412 /* main.mm */ = {isa = PBXFileReference; fileEncoding = 4; lastKnownFileType = sourcecode.cpp.objcpp; name = main.mm; path = Classes/main.mm; sourceTree = "<group>"; };
		0A1B2C3D4E5F60718293A414 /* ProductName.app */ = {isa = PBXFileReference; explicitFileType = wrapper.application; includeInIndex = 0; path = ProductName.app; sourceTree = BUILT_PRODUCTS_DIR; };
/* End PBXFileReference section */

/* Begin PBXFrameworksBuildPhase section */
		0A1B2C3D4E5F60718293A40E /* Frameworks */ = {
			isa = PBXFrameworksBuildPhase;
			buildActionMask = 2147483647;
			files = (
				0A1B2C3D4E5F60718293A411 /* Foundation.framework in Frameworks */,
			);
			runOnlyForDeploymentPostprocessing = 0;
		};
/* End PBXFrameworksBuildPhase section */

/* Begin PBXGroup section */
		0A1B2C3D4E5F60718293A402 /* CustomTemplate */ = {
			isa = PBXGroup;
			children = (
				0A1B2C3D4E5F60718293A412 /* main.mm */,
				0A1B2C3D4E5F60718293A404 /* Frameworks */,
				0A1B2C3D4E5F60718293A403 /* Products */,
			);
			name = CustomTemplate;
			sourceTree = "<group>";
		};
		0A1B2C3D4E5F60718293A403 /* Products */ = {
			isa = PBXGroup;
			children = (
				0A1B2C3D4E5F60718293A414 /* ProductName.app */,
			);
			name = Products;
			sourceTree = "<group>";
		};
		0A1B2C3D4E5F60718293A404 /* Frameworks */ = {
			isa = PBXGroup;
			children = (
				0A1B2C3D4E5F60718293A410 /* Foundation.framework */,
			);
			name = Frameworks;
			sourceTree = "<group>";
		};
/* End PBXGroup section */

/* Begin PBXNativeTarget section */
		0A1B2C3D4E5F60718293A406 /* Unity-iPhone */ = {
			isa = PBXNativeTarget;
			buildConfigurationList = 0A1B2C3D4E5F60718293A407 /* Build configuration list for PBXNativeTarget "Unity-iPhone" */;
			buildPhases = (
				0A1B2C3D4E5F60718293A40D /* Sources */,
				0A1B2C3D4E5F60718293A40E /* Frameworks */,
			);
			buildRules = (
			);
			dependencies = (
			);
			name = "Unity-iPhone";
			productName = "Unity-iPhone";
			productReference = 0A1B2C3D4E5F60718293A414 /* ProductName.app */;
			productType = "com.apple.product-type.application";
		};
/* End PBXNativeTarget section */

/* Begin PBXProject section */
		0A1B2C3D4E5F60718293A401 /* Project object */ = {
			isa = PBXProject;
			buildConfigurationList = 0A1B2C3D4E5F60718293A40A /* Build configuration list for PBXProject "Unity-iPhone" */;
			compatibilityVersion = "Xcode 3.2";
			mainGroup = 0A1B2C3D4E5F60718293A402 /* CustomTemplate */;
			productRefGroup = 0A1B2C3D4E5F60718293A403 /* Products */;
			projectDirPath = "";
			projectRoot = "";
			targets = (
				0A1B2C3D4E5F60718293A406 /* Unity-iPhone */,
			);
		};
/* End PBXProject section */

/* Begin PBXSourcesBuildPhase section */
		0A1B2C3D4E5F60718293A40D /* Sources */ = {
			isa = PBXSourcesBuildPhase;
			buildActionMask = 2147483647;
			files = (
				0A1B2C3D4E5F60718293A413 /* main.mm in Sources */,
			);
			runOnlyForDeploymentPostprocessing = 0;
		};
/* End PBXSourcesBuildPhase section */

/* Begin XCBuildConfiguration section */
		0A1B2C3D4E5F60718293A408 /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				ENABLE_BITCODE = YES;
				OTHER_LDFLAGS = (
					"$(inherited)",
					"-weak_framework",
					CoreMotion,
				);
				PRODUCT_NAME = ProductName;
			};
			name = Debug;
		};
		0A1B2C3D4E5F60718293A409 /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				ENABLE_BITCODE = YES;
				PRODUCT_NAME = ProductName;
			};
			name = Release;
		};
		0A1B2C3D4E5F60718293A40B /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				SDKROOT = iphoneos;
			};
			name = Debug;
		};
		0A1B2C3D4E5F60718293A40C /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				SDKROOT = iphoneos;
			};
			name = Release;
		};
/* End XCBuildConfiguration section */

/* Begin XCConfigurationList section */
		0A1B2C3D4E5F60718293A407 /* Build configuration list for PBXNativeTarget "Unity-iPhone" */ = {
			isa = XCConfigurationList;
			buildConfigurations = (
				0A1B2C3D4E5F60718293A408 /* Debug */,
				0A1B2C3D4E5F60718293A409 /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		};
		0A1B2C3D4E5F60718293A40A /* Build configuration list for PBXProject "Unity-iPhone" */ = {
			isa = XCConfigurationList;
			buildConfigurations = (
				0A1B2C3D4E5F60718293A40B /* Debug */,
				0A1B2C3D4E5F60718293A40C /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		};
/* End XCConfigurationList section */
	};
	rootObject = 0A1B2C3D4E5F60718293A401 /* Project object */;
}
"""

SCHEME = """<?xml version="1.0" encoding="UTF-8"?>
<Scheme
   LastUpgradeVersion = "1000"
   version = "1.3">
   <BuildAction
      parallelizeBuildables = "YES"
      buildImplicitDependencies = "YES">
   </BuildAction>
   <TestAction
      buildConfiguration = "Debug"
      shouldUseLaunchSchemeArgsEnv = "YES">
   </TestAction>
   <LaunchAction
      buildConfiguration = "Release"
      launchStyle = "0"
      debugDocumentVersioning = "YES">
      <BuildableProductRunnable
         runnableDebuggingMode = "0">
         <BuildableReference
            BuildableIdentifier = "primary"
            BlueprintName = "Unity-iPhone">
         </BuildableReference>
      </BuildableProductRunnable>
   </LaunchAction>
   <ArchiveAction
      buildConfiguration = "Release"
      revealArchiveInOrganizer = "YES">
   </ArchiveAction>
</Scheme>
"""

EDITOR_BUILD_SETTINGS = """%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!1045 &1
EditorBuildSettings:
  m_ObjectHideFlags: 0
  serializedVersion: 2
  m_Scenes:
  - enabled: 0
    path: Assets/Scenes/Menu.unity
    guid: 8c9cfa26abfee488c85f1582747f6a02
  - enabled: 1
    path: Assets/Scenes/CounterScene.unity
    guid: 2cda990e2423bbf4892e6590ba056729
  - enabled: 1
    path: Assets/Scenes/Credits.unity
    guid: 9fc0d4010bbf28b4594072e72b8655ab
  m_configObjects: {}
"""


def write_export(root: Path, *, scheme: str = SCHEME, pbxproj: str = PBXPROJ) -> Path:
    """Lay out `<root>/Unity-iPhone.xcodeproj` with a shared scheme and project file."""
    proj = root / "Unity-iPhone.xcodeproj"
    schemes = proj / "xcshareddata" / "xcschemes"
    schemes.mkdir(parents=True)
    (schemes / "Unity-iPhone.xcscheme").write_text(scheme, encoding="utf-8")
    (proj / "project.pbxproj").write_text(pbxproj, encoding="utf-8")
    return root


@pytest.fixture
def export_dir(tmp_path) -> Path:
    return write_export(tmp_path / "export")


@pytest.fixture
def make_export(tmp_path):
    def _make(name: str = "export", **kwargs) -> Path:
        return write_export(tmp_path / name, **kwargs)

    return _make


@pytest.fixture
def pbxproj_text() -> str:
    return PBXPROJ


@pytest.fixture
def scheme_text() -> str:
    return SCHEME


@pytest.fixture
def editor_build_settings_text() -> str:
    return EDITOR_BUILD_SETTINGS
