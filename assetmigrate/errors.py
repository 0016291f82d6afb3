class AssetMigrateError(Exception):
    """Base error for the project."""

class ConfigurationError(AssetMigrateError):
    """Bad input: missing source, missing forced audio file, broken rules file."""

class FilesystemError(AssetMigrateError):
    """A create, copy, rename or directory listing failed. Aborts the run."""

class DiscoveryWarning(UserWarning):
    """Non-fatal: nothing to migrate for one asset kind. Collected, never raised."""
