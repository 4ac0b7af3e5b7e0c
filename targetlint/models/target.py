"""Target model — the in-memory description of a buildable unit that gets linted.

The caller builds these models before linting starts; rules only read them.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from targetlint.models.dependencies import TargetDependency


class Product(str, Enum):
    """The kind of product a target builds."""

    APP = "app"
    STATIC_LIBRARY = "static_library"
    DYNAMIC_LIBRARY = "dynamic_library"
    FRAMEWORK = "framework"
    STATIC_FRAMEWORK = "static_framework"
    UNIT_TESTS = "unit_tests"
    UI_TESTS = "ui_tests"
    BUNDLE = "bundle"
    COMMAND_LINE_TOOL = "command_line_tool"
    APP_EXTENSION = "app_extension"
    WATCH2_APP = "watch2_app"
    WATCH2_EXTENSION = "watch2_extension"
    TV_TOP_SHELF_EXTENSION = "tv_top_shelf_extension"
    MESSAGES_EXTENSION = "messages_extension"
    STICKER_PACK_EXTENSION = "sticker_pack_extension"
    APP_CLIP = "app_clip"
    XPC = "xpc"
    SYSTEM_EXTENSION = "system_extension"
    EXTENSION_KIT_EXTENSION = "extension_kit_extension"
    MACRO = "macro"


# Products whose bundle cannot carry resources on its own
PRODUCTS_WITHOUT_RESOURCES = frozenset({
    Product.COMMAND_LINE_TOOL,
    Product.DYNAMIC_LIBRARY,
    Product.STATIC_LIBRARY,
    Product.STATIC_FRAMEWORK,
    Product.MACRO,
})


class Platform(str, Enum):
    IOS = "iOS"
    MACOS = "macOS"
    WATCHOS = "watchOS"
    TVOS = "tvOS"
    VISIONOS = "visionOS"


class Destination(str, Enum):
    """A device family a target can run on. Values are the raw identifiers."""

    IPHONE = "iPhone"
    IPAD = "iPad"
    MAC = "mac"
    MAC_WITH_IPAD_DESIGN = "macWithiPadDesign"
    MAC_CATALYST = "macCatalyst"
    APPLE_WATCH = "appleWatch"
    APPLE_TV = "appleTv"
    APPLE_VISION = "appleVision"
    APPLE_VISION_WITH_IPAD_DESIGN = "appleVisionWithiPadDesign"

    @property
    def platform(self) -> Platform:
        return DESTINATION_PLATFORMS[self]


DESTINATION_PLATFORMS = {
    Destination.IPHONE: Platform.IOS,
    Destination.IPAD: Platform.IOS,
    Destination.MAC: Platform.MACOS,
    Destination.MAC_WITH_IPAD_DESIGN: Platform.IOS,
    Destination.MAC_CATALYST: Platform.IOS,
    Destination.APPLE_WATCH: Platform.WATCHOS,
    Destination.APPLE_TV: Platform.TVOS,
    Destination.APPLE_VISION: Platform.VISIONOS,
    Destination.APPLE_VISION_WITH_IPAD_DESIGN: Platform.IOS,
}


class _Model(BaseModel):
    model_config = {"frozen": True}


class DeploymentTargets(_Model):
    """Minimum OS versions, one optional version string per platform."""

    iOS: Optional[str] = None
    macOS: Optional[str] = None
    watchOS: Optional[str] = None
    tvOS: Optional[str] = None
    visionOS: Optional[str] = None

    def configured_versions(self) -> list[tuple[Platform, str]]:
        """Platforms with a configured version, in platform declaration order."""
        versions = []
        for platform in Platform:
            version = getattr(self, platform.value)
            if version is not None:
                versions.append((platform, version))
        return versions


# Literal strings are plain values; lists are array settings
SettingValue = Union[str, list[str]]


class Configuration(_Model):
    settings: dict[str, SettingValue] = Field(default_factory=dict)
    xcconfig: Optional[Path] = None


class BuildSettings(_Model):
    """Build settings: a base map plus per-configuration overrides keyed by configuration name."""

    base: dict[str, SettingValue] = Field(default_factory=dict)
    configurations: dict[str, Optional[Configuration]] = Field(default_factory=dict)


class FileCodeGen(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROJECT = "project"
    DISABLED = "disabled"


class SourceFile(_Model):
    path: Path
    compiler_flags: Optional[str] = None
    code_gen: Optional[FileCodeGen] = None

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")


class ResourceFileElement(_Model):
    path: Path
    tags: tuple[str, ...] = ()
    folder_reference: bool = False


# ── Info.plist ──

class InfoPlistFile(_Model):
    kind: Literal["file"] = "file"
    path: Path
    configuration: Optional[str] = None


class GeneratedInfoPlist(_Model):
    kind: Literal["generated_file"] = "generated_file"
    path: Path
    configuration: Optional[str] = None


class InfoPlistDictionary(_Model):
    kind: Literal["dictionary"] = "dictionary"
    content: dict = Field(default_factory=dict)
    extend_default: bool = False


class InfoPlistVariable(_Model):
    """A plist path given as a build variable, resolved only at build time."""

    kind: Literal["variable"] = "variable"
    name: str
    configuration: Optional[str] = None


InfoPlist = Annotated[
    Union[InfoPlistFile, GeneratedInfoPlist, InfoPlistDictionary, InfoPlistVariable],
    Field(discriminator="kind"),
]


# ── Entitlements ──

class EntitlementsFile(_Model):
    kind: Literal["file"] = "file"
    path: Path
    configuration: Optional[str] = None


class GeneratedEntitlements(_Model):
    kind: Literal["generated_file"] = "generated_file"
    path: Path
    configuration: Optional[str] = None


class EntitlementsDictionary(_Model):
    kind: Literal["dictionary"] = "dictionary"
    content: dict = Field(default_factory=dict)


class EntitlementsVariable(_Model):
    kind: Literal["variable"] = "variable"
    name: str
    configuration: Optional[str] = None


Entitlements = Annotated[
    Union[EntitlementsFile, GeneratedEntitlements, EntitlementsDictionary, EntitlementsVariable],
    Field(discriminator="kind"),
]


def literal_path(reference) -> Optional[Path]:
    """Literal path of an Info.plist or entitlements reference, if it has one."""
    if isinstance(reference, (InfoPlistFile, GeneratedInfoPlist, EntitlementsFile, GeneratedEntitlements)):
        return reference.path
    return None


class CoreDataModel(_Model):
    path: Path
    versions: tuple[Path, ...] = ()
    current_version: str


class OnDemandResourcesTags(_Model):
    initial_install: Optional[list[str]] = None
    prefetch_order: Optional[list[str]] = None


class ScriptOrder(str, Enum):
    PRE = "pre"
    POST = "post"


class TargetScript(_Model):
    """A build phase script. Exactly one of tool, path or embedded_script is expected."""

    name: str
    order: ScriptOrder = ScriptOrder.PRE
    tool: Optional[str] = None
    path: Optional[Path] = None
    embedded_script: Optional[str] = None
    arguments: list[str] = Field(default_factory=list)
    input_paths: list[str] = Field(default_factory=list)
    output_paths: list[str] = Field(default_factory=list)


class Target(_Model):
    """A single buildable unit of a project."""

    name: str
    destinations: frozenset[Destination]
    product: Product
    product_name: str
    bundle_id: str
    deployment_targets: DeploymentTargets = Field(default_factory=DeploymentTargets)
    info_plist: Optional[InfoPlist] = None
    entitlements: Optional[Entitlements] = None
    settings: Optional[BuildSettings] = None
    sources: list[SourceFile] = Field(default_factory=list)
    resources: list[ResourceFileElement] = Field(default_factory=list)
    scripts: list[TargetScript] = Field(default_factory=list)
    dependencies: list[TargetDependency] = Field(default_factory=list)
    core_data_models: list[CoreDataModel] = Field(default_factory=list)
    on_demand_resources_tags: Optional[OnDemandResourcesTags] = None
    mergeable: bool = False

    @property
    def platforms(self) -> list[Platform]:
        """Platforms covered by the destinations, in platform declaration order."""
        covered = {destination.platform for destination in self.destinations}
        return [platform for platform in Platform if platform in covered]

    def supports(self, platform: Platform) -> bool:
        return any(destination.platform == platform for destination in self.destinations)

    @property
    def supports_resources(self) -> bool:
        return self.product not in PRODUCTS_WITHOUT_RESOURCES


class ProjectOptions(_Model):
    """Project-wide generation options that influence target linting."""

    disable_bundle_accessors: bool = False
    disable_synthesized_resource_accessors: bool = False
    automatic_schemes: bool = True
