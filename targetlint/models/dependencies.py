"""Target dependencies — a closed set of shapes, each with a type label and display name.

Every dependency model is frozen so it can be counted and compared by value:
two dependencies are equal only if they have the same shape and payload.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from targetlint.models.signature import Signature


class LinkingStatus(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"


class PackageType(str, Enum):
    """How a Swift package product is consumed."""

    RUNTIME = "runtime"
    RUNTIME_EMBEDDED = "runtimeEmbedded"
    PLUGIN = "plugin"
    MACRO = "macro"


class _Dependency(BaseModel):
    # Platform filter names, e.g. ("ios", "macos")
    condition: Optional[tuple[str, ...]] = None

    model_config = {"frozen": True}


class TargetReference(_Dependency):
    kind: Literal["target"] = "target"
    name: str
    status: LinkingStatus = LinkingStatus.REQUIRED


class ProjectReference(_Dependency):
    kind: Literal["project"] = "project"
    target: str
    path: Path
    status: LinkingStatus = LinkingStatus.REQUIRED


class FrameworkDependency(_Dependency):
    kind: Literal["framework"] = "framework"
    path: Path
    status: LinkingStatus = LinkingStatus.REQUIRED


class XCFrameworkDependency(_Dependency):
    """A prebuilt multi-platform binary, optionally pinned to an expected signature."""

    kind: Literal["xcframework"] = "xcframework"
    path: Path
    expected_signature: Optional[Signature] = None
    status: LinkingStatus = LinkingStatus.REQUIRED


class LibraryDependency(_Dependency):
    kind: Literal["library"] = "library"
    path: Path
    public_headers: Path
    swift_module_map: Optional[Path] = None


class PackageDependency(_Dependency):
    kind: Literal["package"] = "package"
    product: str
    type: PackageType = PackageType.RUNTIME


class SdkDependency(_Dependency):
    kind: Literal["sdk"] = "sdk"
    name: str
    status: LinkingStatus = LinkingStatus.REQUIRED


class XCTestDependency(_Dependency):
    kind: Literal["xctest"] = "xctest"


TargetDependency = Annotated[
    Union[
        TargetReference,
        ProjectReference,
        FrameworkDependency,
        XCFrameworkDependency,
        LibraryDependency,
        PackageDependency,
        SdkDependency,
        XCTestDependency,
    ],
    Field(discriminator="kind"),
]


def type_name(dependency: TargetDependency) -> str:
    """Human-readable dependency type, used in issue text."""
    if isinstance(dependency, PackageDependency):
        return f"{dependency.type.value} package"
    if isinstance(
        dependency,
        (
            TargetReference,
            ProjectReference,
            FrameworkDependency,
            XCFrameworkDependency,
            LibraryDependency,
            SdkDependency,
            XCTestDependency,
        ),
    ):
        return dependency.kind
    raise TypeError(f"Unknown dependency type: {type(dependency).__name__}")


def display_name(dependency: TargetDependency) -> str:
    """Name shown for a dependency in issue text."""
    if isinstance(dependency, (TargetReference, SdkDependency)):
        return dependency.name
    if isinstance(dependency, ProjectReference):
        return dependency.target
    if isinstance(dependency, (FrameworkDependency, XCFrameworkDependency, LibraryDependency)):
        return dependency.path.name
    if isinstance(dependency, PackageDependency):
        return dependency.product
    if isinstance(dependency, XCTestDependency):
        return "xctest"
    raise TypeError(f"Unknown dependency type: {type(dependency).__name__}")
