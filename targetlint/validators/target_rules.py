"""Target rules — resources, deployment targets, codegen attributes and on-demand resource tags."""

from targetlint.models import Destination, Platform, ProjectOptions, Target
from targetlint.validators.base import SyncRule
from targetlint.validators.models import LintingIssue
from targetlint.validators.reference_data import CODEGEN_SUPPORTED_EXTENSIONS, OS_VERSION_PATTERN


class LibraryResourcesRule(SyncRule):
    """Products that can't carry resources need bundle accessors to ship them."""

    @property
    def name(self) -> str:
        return "LibraryResourcesRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        if target.supports_resources:
            return []

        if target.resources and options.disable_bundle_accessors:
            return [self._error(
                f"Target {target.name} cannot contain resources. For {target.product.value} targets "
                "to support resources, 'Bundle Accessors' feature should be enabled."
            )]

        return []


class DeploymentTargetRule(SyncRule):
    """Deployment target versions must be well formed and match the destinations.

    A malformed version skips the destination check for that platform.
    """

    @property
    def name(self) -> str:
        return "DeploymentTargetRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        issues = []
        destinations = sorted(destination.value for destination in target.destinations)

        for platform, version in target.deployment_targets.configured_versions():
            if not OS_VERSION_PATTERN.search(version):
                issues.append(self._error("The version of deployment target is incorrect"))
                continue

            if not self._is_supported(target, platform):
                issues.append(self._error(
                    f"Found an inconsistency between target destinations `{destinations}` "
                    f"and deployment target `{platform.value}`"
                ))

        return issues

    @staticmethod
    def _is_supported(target: Target, platform: Platform) -> bool:
        if target.supports(platform):
            return True
        # Designed-for-iPad apps run on visionOS without a native destination
        return (
            platform == Platform.VISIONOS
            and Destination.APPLE_VISION_WITH_IPAD_DESIGN in target.destinations
        )


class SourceCodeGenRule(SyncRule):
    """Code generation attributes only apply to a few source file types."""

    @property
    def name(self) -> str:
        return "SourceCodeGenRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        return [
            self._warning(
                f"Target '{target.name}' has a source file at path {source.path} with unsupported "
                f"`codeGen` attributes. Only {_listed(CODEGEN_SUPPORTED_EXTENSIONS)} are known to support this."
            )
            for source in target.sources
            if source.code_gen is not None and source.extension not in CODEGEN_SUPPORTED_EXTENSIONS
        ]


class OnDemandResourcesTagsRule(SyncRule):
    """Prefetch-order tags that are also initial-install tags are ignored by the build tool."""

    @property
    def name(self) -> str:
        return "OnDemandResourcesTagsRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        tags = target.on_demand_resources_tags
        if tags is None or tags.initial_install is None or tags.prefetch_order is None:
            return []

        initial_install = set(tags.initial_install)
        overlapping = []
        for tag in tags.prefetch_order:
            if tag in initial_install and tag not in overlapping:
                overlapping.append(tag)

        return [
            self._warning(
                f'Prefetched Order Tag "{tag}" is already assigned to Initial Install Tags category '
                f"for the target {target.name} and will be ignored by Xcode"
            )
            for tag in overlapping
        ]


def _listed(items) -> str:
    """Format items as '"a", "b" and "c"'."""
    quoted = [f'"{item}"' for item in items]
    if len(quoted) <= 1:
        return "".join(quoted)
    return ", ".join(quoted[:-1]) + " and " + quoted[-1]
