"""Automatic role assignment for new profiles."""

import logging

from health_analyzer.errors import DataSourceError
from health_analyzer.schemas.profile import DEFAULT_ROLE, OFFICIAL_ROLE, Role, UserProfile

logger = logging.getLogger(__name__)


def assign_role(record: dict, store) -> Role:
    """
    Promote a new profile to OFFICIAL when its phone number is pre-approved.

    Returns the role the profile ends up with. A failed allowlist lookup
    keeps the default role.
    """
    profile = UserProfile.model_validate(record)
    logger.info("Handling new user profile creation for user ID: %s", profile.id)

    if not profile.phone:
        logger.info("User %s has no phone number, skipping role check.", profile.id)
        return DEFAULT_ROLE

    try:
        approved = store.is_pre_approved(profile.phone)
    except DataSourceError as e:
        logger.error("Error checking pre-approved list: %s", e)
        return DEFAULT_ROLE

    if not approved:
        logger.info("User %s is a standard %s.", profile.id, DEFAULT_ROLE)
        return DEFAULT_ROLE

    try:
        store.update_role(profile.id, OFFICIAL_ROLE)
    except DataSourceError as e:
        logger.error("Error assigning %s role to user %s: %s", OFFICIAL_ROLE, profile.id, e)
        return DEFAULT_ROLE

    logger.info("Assigned %s role to user %s", OFFICIAL_ROLE, profile.id)
    return OFFICIAL_ROLE
