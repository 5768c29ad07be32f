# Overview: Permission lookups used by the credential table and the session payload.

from .definitions import PERMISSION_DEFINITIONS
from .roles import DEFAULT_ROLE_PERMISSIONS


_DEFINITIONS_BY_CODE = {perm[0]: perm for perm in PERMISSION_DEFINITIONS}


def get_all_permission_codes():
    """Permission codes in catalogue order."""
    return [perm[0] for perm in PERMISSION_DEFINITIONS]


def validate_permission_code(code):
    return code in _DEFINITIONS_BY_CODE


def get_permission_definition(code):
    """
    Catalogue entry for a code as {code, name, description, category}.

    Returns None for a code the catalogue does not define.
    """
    perm = _DEFINITIONS_BY_CODE.get(code)
    if perm is None:
        return None
    code, name, description, category = perm
    return {
        "code": code,
        "name": name,
        "description": description,
        "category": category,
    }


def describe_permissions(codes):
    """
    Definitions for a session's permission codes, in the order given.

    Codes missing from the catalogue are still listed, with the code as
    their name, so a session restored from older storage shows what it holds.
    """
    described = []
    for code in codes:
        definition = get_permission_definition(code)
        if definition is None:
            definition = {"code": code, "name": code, "description": "", "category": None}
        described.append(definition)
    return described


def get_role_permissions(role):
    """Default permission codes for a role; unknown roles get none."""
    return list(DEFAULT_ROLE_PERMISSIONS.get(role, []))
