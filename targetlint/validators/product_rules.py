"""Product rules — product name, PRODUCT_NAME setting, bundle id, platform and mergeability checks."""

from targetlint.models import Product, ProjectOptions, Target
from targetlint.validators.base import SyncRule
from targetlint.validators.models import LintingIssue
from targetlint.validators.reference_data import (
    BUNDLE_IDENTIFIER_CHARACTERS,
    FRAMEWORK_PRODUCTS,
    INTERPOLATION_PATTERNS,
    INVALID_PRODUCTS_FOR_PLATFORMS,
    PRODUCT_NAME_CHARACTERS,
    PRODUCT_NAME_EXTRA_CHARACTERS,
    PRODUCT_NAME_SETTING,
)


class ProductNameRule(SyncRule):
    """Product names are restricted to characters every build tool accepts.

    Frameworks are stricter than other products: their name becomes a module
    name, so periods and hyphens are not allowed.
    """

    @property
    def name(self) -> str:
        return "ProductNameRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        allows_extra_characters = target.product not in FRAMEWORK_PRODUCTS
        allowed = PRODUCT_NAME_CHARACTERS
        if allows_extra_characters:
            allowed = allowed | PRODUCT_NAME_EXTRA_CHARACTERS

        if all(char in allowed for char in target.product_name):
            return []

        extra = ", period (.), hyphen (-)" if allows_extra_characters else ""
        return [self._warning(
            f"Invalid product name '{target.product_name}'. This string must contain only "
            f"alphanumeric (A-Z,a-z,0-9){extra}, and underscore (_) characters."
        )]


class ProductNameBuildSettingsRule(SyncRule):
    """Flags PRODUCT_NAME overrides that vary per configuration or depend on build variables."""

    @property
    def name(self) -> str:
        return "ProductNameBuildSettingsRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        issues = []
        product_names = self._literal_product_names(target)

        if len(product_names) > 1:
            issues.append(self._warning(
                f"The target '{target.name}' has a PRODUCT_NAME build setting that is different "
                "across configurations and might cause unpredictable behaviours."
            ))

        if any("$" in product_name for product_name in product_names):
            issues.append(self._warning(
                f"The target '{target.name}' has a PRODUCT_NAME build setting containing variables "
                "that are resolved at build time, and might cause unpredictable behaviours."
            ))

        return issues

    def _literal_product_names(self, target: Target) -> set[str]:
        """Collect literal PRODUCT_NAME values from the base and every configuration."""
        names = set()
        settings = target.settings
        if settings is None:
            return names

        value = settings.base.get(PRODUCT_NAME_SETTING)
        if isinstance(value, str):
            names.add(value)

        for configuration in settings.configurations.values():
            if configuration is None:
                continue
            value = configuration.settings.get(PRODUCT_NAME_SETTING)
            if isinstance(value, str):
                names.add(value)

        return names


class PlatformProductRule(SyncRule):
    """Rejects product kinds that can never be built for one of the target's platforms."""

    @property
    def name(self) -> str:
        return "PlatformProductRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        for platform in target.platforms:
            invalid_products = INVALID_PRODUCTS_FOR_PLATFORMS.get(platform, frozenset())
            if target.product in invalid_products:
                return [self._error(
                    f"'{target.name}' for platform '{platform.value}' can't have a product type "
                    f"'{target.product.value}'"
                )]
        return []


class BundleIdentifierRule(SyncRule):
    """Verifies the bundle identifier is a valid UTI once build-time substitutions are removed."""

    @property
    def name(self) -> str:
        return "BundleIdentifierRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        bundle_identifier = target.bundle_id

        # Interpolated variables can't be checked statically
        for pattern in INTERPOLATION_PATTERNS:
            bundle_identifier = pattern.sub("", bundle_identifier)

        if all(char in BUNDLE_IDENTIFIER_CHARACTERS for char in bundle_identifier):
            return []

        return [self._error(
            f"Invalid bundle identifier '{bundle_identifier}'. This string must be a uniform type "
            "identifier (UTI) that contains only alphanumeric (A-Z,a-z,0-9), hyphen (-), and "
            "period (.) characters."
        )]


class MergeableLibraryRule(SyncRule):
    """Only dynamic frameworks can be merged into their dependents."""

    @property
    def name(self) -> str:
        return "MergeableLibraryRule"

    def validate(self, target: Target, options: ProjectOptions) -> list[LintingIssue]:
        if target.mergeable and target.product != Product.FRAMEWORK:
            return [self._error(
                f"Target {target.name} can't be marked as mergeable because it is not a dynamic target"
            )]
        return []
