#!/usr/bin/env python3
"""
Console profile registry
Holds the registered profiles and the single active one, and tells
subscribers when the active profile changes
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from .color_utils import ColorLike
from .console_profiles import BUILTIN_PROFILES, ConsoleProfile
from .constants import DEFAULT_PROFILE_ID
from .exceptions import ProfileNotFoundError
from .logging_config import get_logger
from .validation import ValidationResult

logger = get_logger('profile_registry')


@dataclass(frozen=True)
class ProfileChange:
    """Active profile switch, handed to observers and returned by set_active"""

    previous: Optional[ConsoleProfile]
    current: ConsoleProfile


ProfileObserver = Callable[[ProfileChange], None]


class ProfileRegistry:
    """
    Registered console profiles plus the active one.

    The default profile becomes active as soon as it is registered, so a
    registry holding it always has an active profile.
    """

    def __init__(self, profiles: Iterable[ConsoleProfile] = ()):
        self._profiles: Dict[str, ConsoleProfile] = {}
        self._active: Optional[ConsoleProfile] = None
        self._observers: List[ProfileObserver] = []
        for profile in profiles:
            self.register(profile)

    def register(self, profile: ConsoleProfile) -> None:
        """
        Add a profile, replacing any profile with the same id.

        Replacing the active profile makes the new one active and notifies
        observers with a ProfileChange.
        """
        if not isinstance(profile, ConsoleProfile):
            raise TypeError(f"Expected ConsoleProfile, got {type(profile).__name__}")
        if profile.id in self._profiles:
            logger.debug(f"Replacing registered profile '{profile.id}'")
        self._profiles[profile.id] = profile

        if self._active is None:
            if profile.id == DEFAULT_PROFILE_ID:
                self.set_active(profile.id)
        elif self._active.id == profile.id and self._active is not profile:
            change = ProfileChange(previous=self._active, current=profile)
            self._active = profile
            logger.info(f"Active console profile replaced: {profile.name}")
            self._notify(change)

    def get(self, profile_id: str) -> Optional[ConsoleProfile]:
        return self._profiles.get(profile_id)

    def registered_ids(self) -> List[str]:
        return list(self._profiles)

    def all(self) -> List[ConsoleProfile]:
        return list(self._profiles.values())

    def __contains__(self, profile_id) -> bool:
        return profile_id in self._profiles

    def __len__(self):
        return len(self._profiles)

    def subscribe(self, observer: ProfileObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: ProfileObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def set_active(self, profile_id: str) -> Optional[ProfileChange]:
        """
        Make a registered profile the active one.

        Args:
            profile_id: Id of a registered profile

        Returns:
            ProfileChange when the active profile changed, None if it was
            already active

        Raises:
            ProfileNotFoundError: If no profile has that id
        """
        profile = self._profiles.get(profile_id)
        if profile is None:
            raise ProfileNotFoundError(f"Unknown console profile: {profile_id}")

        if self._active is profile:
            return None

        change = ProfileChange(previous=self._active, current=profile)
        self._active = profile
        logger.info(f"Active console profile: {profile.name}")

        self._notify(change)
        return change

    def _notify(self, change: ProfileChange) -> None:
        for observer in list(self._observers):
            observer(change)

    def get_active(self) -> ConsoleProfile:
        """
        Return the active profile.

        Raises:
            ProfileNotFoundError: If no profile is active, which only happens
                before the default profile is registered
        """
        if self._active is None:
            raise ProfileNotFoundError("No console profile is active")
        return self._active

    def is_active(self, profile_id: str) -> bool:
        return self._active is not None and self._active.id == profile_id

    def has_restrictions(self) -> bool:
        return self.get_active().has_restrictions()

    def validate_dimensions(self, width: int, height: int) -> ValidationResult:
        return self.get_active().validate_dimensions(width, height)

    def validate_color_count(self, colors: Iterable[ColorLike]) -> ValidationResult:
        return self.get_active().validate_color_count(colors)


def create_default_registry(active_id: Optional[str] = None) -> ProfileRegistry:
    """
    Registry with every built-in profile.

    Args:
        active_id: Profile to activate, typically read from saved settings.
            Unknown or missing ids fall back to the default profile.

    Returns:
        Populated registry with one active profile
    """
    registry = ProfileRegistry(BUILTIN_PROFILES)
    if active_id and active_id in registry:
        registry.set_active(active_id)
    else:
        if active_id:
            logger.warning(f"Unknown console profile '{active_id}', using default")
        registry.set_active(DEFAULT_PROFILE_ID)
    return registry
