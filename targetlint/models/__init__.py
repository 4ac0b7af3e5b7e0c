"""Read-only models handed to the linter: targets, dependencies and signatures."""

from targetlint.models.dependencies import (
    FrameworkDependency,
    LibraryDependency,
    LinkingStatus,
    PackageDependency,
    PackageType,
    ProjectReference,
    SdkDependency,
    TargetDependency,
    TargetReference,
    XCFrameworkDependency,
    XCTestDependency,
    display_name,
    type_name,
)
from targetlint.models.signature import (
    AppleCertificateSignature,
    SelfSignedSignature,
    UnsignedSignature,
    XCFrameworkSignature,
    parse_signature,
    signature_string,
)
from targetlint.models.target import (
    BuildSettings,
    Configuration,
    CoreDataModel,
    DeploymentTargets,
    Destination,
    EntitlementsDictionary,
    EntitlementsFile,
    EntitlementsVariable,
    FileCodeGen,
    GeneratedEntitlements,
    GeneratedInfoPlist,
    InfoPlistDictionary,
    InfoPlistFile,
    InfoPlistVariable,
    OnDemandResourcesTags,
    Platform,
    Product,
    ProjectOptions,
    ResourceFileElement,
    ScriptOrder,
    SourceFile,
    Target,
    TargetScript,
)

__all__ = [
    "AppleCertificateSignature",
    "BuildSettings",
    "Configuration",
    "CoreDataModel",
    "DeploymentTargets",
    "Destination",
    "EntitlementsDictionary",
    "EntitlementsFile",
    "EntitlementsVariable",
    "FileCodeGen",
    "FrameworkDependency",
    "GeneratedEntitlements",
    "GeneratedInfoPlist",
    "InfoPlistDictionary",
    "InfoPlistFile",
    "InfoPlistVariable",
    "LibraryDependency",
    "LinkingStatus",
    "OnDemandResourcesTags",
    "PackageDependency",
    "PackageType",
    "Platform",
    "Product",
    "ProjectOptions",
    "ProjectReference",
    "ResourceFileElement",
    "ScriptOrder",
    "SdkDependency",
    "SelfSignedSignature",
    "SourceFile",
    "Target",
    "TargetDependency",
    "TargetReference",
    "TargetScript",
    "UnsignedSignature",
    "XCFrameworkDependency",
    "XCFrameworkSignature",
    "XCTestDependency",
    "display_name",
    "parse_signature",
    "signature_string",
    "type_name",
]
