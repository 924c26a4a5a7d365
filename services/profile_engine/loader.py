import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .config import scoring_settings
from .models import DIMENSION_NAMES, ProfileCatalog, ProfileConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "assets" / "profiles.yml"
SUB_PROFILES_PER_PROFILE = 3


def _check_unique(ids, kind: str) -> None:
    seen = set()
    for item_id in ids:
        if item_id in seen:
            raise ProfileConfigurationError(f"Duplicate {kind} ID found: {item_id}")
        seen.add(item_id)


def _check_dimension_keys(mapping: Dict[str, Any], owner: str, field: str) -> None:
    expected = set(DIMENSION_NAMES)
    actual = set(mapping)
    if actual != expected:
        missing = sorted(expected - actual)
        unknown = sorted(actual - expected)
        raise ProfileConfigurationError(
            f"Profile '{owner}' {field} must cover exactly the seven dimensions "
            f"(missing: {missing}, unknown: {unknown})"
        )


def load_profile_catalog_data(data: Dict[str, Any]) -> ProfileCatalog:
    """
    Validates raw catalogue data against the ProfileCatalog model and performs
    the structural checks pydantic cannot express.

    Raises:
        ProfileConfigurationError: on any schema or structural violation.
    """
    try:
        catalog = ProfileCatalog.model_validate(data)
    except ValidationError as e:
        raise ProfileConfigurationError(f"Invalid profile catalogue: {e}") from e

    _check_unique([d.id for d in catalog.dimensions], "dimension")
    if tuple(d.id for d in catalog.dimensions) != DIMENSION_NAMES:
        raise ProfileConfigurationError(
            f"Dimensions must be declared in canonical order: {list(DIMENSION_NAMES)}"
        )

    if not catalog.profiles:
        raise ProfileConfigurationError("Profile catalogue defines no primary profiles")
    _check_unique([p.id for p in catalog.profiles], "profile")
    _check_unique([s.id for s in catalog.sub_profiles], "sub-profile")

    sub_profiles_by_id = {s.id: s for s in catalog.sub_profiles}
    claimed = set()

    for profile in catalog.profiles:
        _check_dimension_keys(profile.ideal_dimensions, profile.id, "ideal_dimensions")
        _check_dimension_keys(profile.weights, profile.id, "weights")

        for dimension, (low, high) in profile.ideal_dimensions.items():
            if not (1.0 <= low <= high <= 5.0):
                raise ProfileConfigurationError(
                    f"Profile '{profile.id}' has invalid ideal range for {dimension}: [{low}, {high}]"
                )
        for dimension, weight in profile.weights.items():
            if weight <= 0:
                raise ProfileConfigurationError(
                    f"Profile '{profile.id}' has non-positive weight for {dimension}: {weight}"
                )

        if len(profile.sub_profiles) != SUB_PROFILES_PER_PROFILE:
            raise ProfileConfigurationError(
                f"Profile '{profile.id}' must declare exactly {SUB_PROFILES_PER_PROFILE} sub-profiles"
            )
        for child_id in profile.sub_profiles:
            child = sub_profiles_by_id.get(child_id)
            if child is None:
                raise ProfileConfigurationError(
                    f"Profile '{profile.id}' references unknown sub-profile '{child_id}'"
                )
            if child.parent_profile != profile.id:
                raise ProfileConfigurationError(
                    f"Sub-profile '{child_id}' is listed under '{profile.id}' "
                    f"but declares parent '{child.parent_profile}'"
                )
            claimed.add(child_id)

    orphans = sorted(set(sub_profiles_by_id) - claimed)
    if orphans:
        raise ProfileConfigurationError(f"Sub-profiles not attached to any profile: {orphans}")

    for sub_profile in catalog.sub_profiles:
        if not sub_profile.ideal_pattern:
            raise ProfileConfigurationError(f"Sub-profile '{sub_profile.id}' has an empty ideal pattern")

    return catalog


def load_profile_catalog_from_file(file_path) -> ProfileCatalog:
    """
    Loads the profile catalogue from a YAML file, validates it,
    and returns a ProfileCatalog object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ProfileConfigurationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ProfileConfigurationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise ProfileConfigurationError(f"YAML file is empty or invalid: {file_path}")

    return load_profile_catalog_data(data)


@lru_cache(maxsize=None)
def _load_cached(path: str) -> ProfileCatalog:
    catalog = load_profile_catalog_from_file(path)
    logger.info(
        "Profile catalogue loaded",
        extra={
            "catalog_path": path,
            "catalog_version": catalog.version,
            "profiles": len(catalog.profiles),
            "sub_profiles": len(catalog.sub_profiles),
        },
    )
    return catalog


def get_profile_catalog(path: Optional[str] = None) -> ProfileCatalog:
    """
    Shared, immutable catalogue, loaded once per path for the process lifetime.
    """
    resolved = path or scoring_settings.catalog_path or str(DEFAULT_CATALOG_PATH)
    return _load_cached(str(resolved))
