# Overview: Permission system package.
# Re-exports all public APIs for convenient imports.

from .categories import PermissionCategory
from .definitions import (
    PERMISSION_DEFINITIONS,
    SYSTEM_PERMISSIONS,
    CUSTOMER_PERMISSIONS,
    SUPPLIER_PERMISSIONS,
    INVENTORY_PERMISSIONS,
    SALES_PERMISSIONS,
    REPORT_PERMISSIONS,
    USER_PERMISSIONS,
)
from .roles import (
    DEFAULT_ROLE_PERMISSIONS,
    ROLE_ADMIN,
    ROLE_CASHIER,
    ROLE_USER,
    VALID_ROLES,
)
from .helpers import (
    get_all_permission_codes,
    describe_permissions,
    get_permission_definition,
    get_role_permissions,
    validate_permission_code,
)

__all__ = [
    "PermissionCategory",
    "PERMISSION_DEFINITIONS",
    "SYSTEM_PERMISSIONS",
    "CUSTOMER_PERMISSIONS",
    "SUPPLIER_PERMISSIONS",
    "INVENTORY_PERMISSIONS",
    "SALES_PERMISSIONS",
    "REPORT_PERMISSIONS",
    "USER_PERMISSIONS",
    "DEFAULT_ROLE_PERMISSIONS",
    "ROLE_ADMIN",
    "ROLE_CASHIER",
    "ROLE_USER",
    "VALID_ROLES",
    "get_all_permission_codes",
    "describe_permissions",
    "get_permission_definition",
    "get_role_permissions",
    "validate_permission_code",
]
