"""Reference data — character sets, patterns and compatibility tables used by the rules.

Everything here is built once at import time and never mutated.
"""

import re
import string
from types import MappingProxyType

from targetlint.models import Platform, Product

# ──────────────────────────────────────────────────────────────────────
# CHARACTER SETS
# ──────────────────────────────────────────────────────────────────────

ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)

BUNDLE_IDENTIFIER_CHARACTERS = ALPHANUMERIC | frozenset("-./")

PRODUCT_NAME_CHARACTERS = ALPHANUMERIC | frozenset("_")

# Allowed in product names of everything but (static) frameworks
PRODUCT_NAME_EXTRA_CHARACTERS = frozenset(".-")

FRAMEWORK_PRODUCTS = frozenset({Product.FRAMEWORK, Product.STATIC_FRAMEWORK})


# ──────────────────────────────────────────────────────────────────────
# PATTERNS
# ──────────────────────────────────────────────────────────────────────

# Build-time substitutions: ${VAR} and $(VAR)
INTERPOLATION_PATTERNS = (
    re.compile(r"\$\{.+\}"),
    re.compile(r"\$\(.+\)"),
)

# Searched for anywhere in the version string, e.g. "16.0-beta" is accepted
OS_VERSION_PATTERN = re.compile(r"\b[0-9]+\.[0-9]+(?:\.[0-9]+)?\b")

PRODUCT_NAME_SETTING = "PRODUCT_NAME"


# ──────────────────────────────────────────────────────────────────────
# PLATFORM / PRODUCT COMPATIBILITY
# ──────────────────────────────────────────────────────────────────────

INVALID_PRODUCTS_FOR_PLATFORMS = MappingProxyType({
    Platform.IOS: frozenset({
        Product.WATCH2_APP,
        Product.WATCH2_EXTENSION,
        Product.TV_TOP_SHELF_EXTENSION,
    }),
})


# ──────────────────────────────────────────────────────────────────────
# SOURCE CODE GENERATION
# ──────────────────────────────────────────────────────────────────────

CODEGEN_SUPPORTED_EXTENSIONS = (
    "intentdefinition",
    "mlmodel",
)
