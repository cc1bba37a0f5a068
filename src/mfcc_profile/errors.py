"""Errors surfaced by the profile generator."""


class ProfileError(Exception):
    """Base class for profile generation errors."""


class InvalidArgument(ProfileError, ValueError):
    """Bad configuration value or unusable input (e.g. empty audio)."""


class SerializationFailure(ProfileError):
    """The export document could not be encoded."""
