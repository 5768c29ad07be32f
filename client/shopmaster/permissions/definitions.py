# Overview: All permission definitions organized by category.
# Each permission is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- SYSTEM --

SYSTEM_PERMISSIONS = [
    (
        "view_all",
        "View All",
        "Reach every admin dashboard view and its quick actions",
        PermissionCategory.SYSTEM,
    ),
]


# -- CUSTOMERS --

CUSTOMER_PERMISSIONS = [
    (
        "add_customer",
        "Manage Customers",
        "List, create, edit and activate/deactivate customers",
        PermissionCategory.CUSTOMERS,
    ),
]


# -- SUPPLIERS --

SUPPLIER_PERMISSIONS = [
    (
        "add_supplier",
        "Manage Suppliers",
        "List, create, edit and activate/deactivate suppliers",
        PermissionCategory.SUPPLIERS,
    ),
]


# -- INVENTORY --

INVENTORY_PERMISSIONS = [
    (
        "manage_inventory",
        "Manage Inventory",
        "Create and edit products and stock levels",
        PermissionCategory.INVENTORY,
    ),
    (
        "view_inventory",
        "View Inventory",
        "View products and stock levels",
        PermissionCategory.INVENTORY,
    ),
]


# -- SALES --

SALES_PERMISSIONS = [
    (
        "process_sales",
        "Process Sales",
        "Ring up sales at the register",
        PermissionCategory.SALES,
    ),
    (
        "make_sales",
        "Make Sales",
        "Legacy sales permission kept for the user role",
        PermissionCategory.SALES,
    ),
    (
        "manage_recovery",
        "Manage Recovery",
        "Record payments against outstanding credit sales",
        PermissionCategory.SALES,
    ),
]


# -- REPORTS --

REPORT_PERMISSIONS = [
    (
        "view_reports",
        "View Reports",
        "Access sales reports and generate the shop report",
        PermissionCategory.REPORTS,
    ),
]


# -- USERS --

USER_PERMISSIONS = [
    (
        "manage_users",
        "Manage Users",
        "Manage console accounts",
        PermissionCategory.USERS,
    ),
]


PERMISSION_DEFINITIONS = (
    SYSTEM_PERMISSIONS
    + CUSTOMER_PERMISSIONS
    + SUPPLIER_PERMISSIONS
    + INVENTORY_PERMISSIONS
    + SALES_PERMISSIONS
    + REPORT_PERMISSIONS
    + USER_PERMISSIONS
)
