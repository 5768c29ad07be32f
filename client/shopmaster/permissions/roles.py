# Overview: Role names and the permission set each role is granted by default.

ROLE_ADMIN = "admin"
ROLE_CASHIER = "cashier"
ROLE_USER = "user"

VALID_ROLES = (ROLE_ADMIN, ROLE_CASHIER, ROLE_USER)

DEFAULT_ROLE_PERMISSIONS = {
    ROLE_ADMIN: [
        "view_all",
        "add_customer",
        "add_supplier",
        "manage_inventory",
        "view_reports",
        "manage_users",
    ],
    ROLE_CASHIER: [
        "process_sales",
        "manage_recovery",
    ],
    # Legacy role, kept for compatibility
    ROLE_USER: [
        "add_customer",
        "view_inventory",
        "make_sales",
    ],
}
