"""
The fixed, ordered registry of configuration checks.

Every check is a plain function `check(context, notices)` that reads
from the CheckContext and records zero or more notices on the
collector. Checks don't depend on each other; the order below is the
order notices are presented in.
"""

from dataclasses import dataclass
from typing import Tuple

from ..models import CheckFunction
from .content import (
    duplicate_identifiers_check,
    field_types_check,
    forbidden_field_names_check,
    inferred_slug_check,
    localization_check,
    new_content_type_check,
    slug_uses_check,
)
from .environment import (
    canonical_check,
    environment_check,
    ip_address_check,
    live_check,
    maintenance_check,
    single_hostname_check,
    top_level_check,
)
from .filesystem import (
    deprecated_debug_check,
    json_get_text_check,
    thumbs_folder_check,
    writable_folders_check,
)
from .runtime import image_functions_check, services_check
from .security import theme_folder_access_check


@dataclass(frozen=True)
class Check:
    """A registered check."""
    name: str
    run: CheckFunction


CHECKS: Tuple[Check, ...] = (
    Check('live', live_check),
    Check('environment', environment_check),
    Check('new_content_type', new_content_type_check),
    Check('slug_uses', slug_uses_check),
    Check('field_types', field_types_check),
    Check('localization', localization_check),
    Check('duplicate_identifiers', duplicate_identifiers_check),
    Check('single_hostname', single_hostname_check),
    Check('ip_address', ip_address_check),
    Check('top_level', top_level_check),
    Check('writable_folders', writable_folders_check),
    Check('thumbs_folder', thumbs_folder_check),
    Check('canonical', canonical_check),
    Check('image_functions', image_functions_check),
    Check('maintenance', maintenance_check),
    Check('services', services_check),
    Check('deprecated_debug', deprecated_debug_check),
    Check('json_get_text', json_get_text_check),
    Check('forbidden_field_names', forbidden_field_names_check),
    Check('inferred_slug', inferred_slug_check),
    Check('theme_folder_access', theme_folder_access_check),
)


def get_check(name: str) -> Check:
    """Look up a registered check by name."""
    for check in CHECKS:
        if check.name == name:
            return check
    raise KeyError(name)


__all__ = ['Check', 'CHECKS', 'get_check']
