"""Profile configuration: models and the local/global profile store."""

from .loader import (
    ConfigPaths,
    ConfigScope,
    ProfileStore,
    active_scope,
    load_profiles,
    store_profiles,
)
from .models import KNOWN_TRIGGERS, RUN_ALL_TRIGGER, Profile, ProfileSet

__all__ = [
    "Profile",
    "ProfileSet",
    "KNOWN_TRIGGERS",
    "RUN_ALL_TRIGGER",
    "ConfigPaths",
    "ConfigScope",
    "ProfileStore",
    "load_profiles",
    "store_profiles",
    "active_scope",
]
