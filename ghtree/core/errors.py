"""Error taxonomy for the clone pipeline."""


class GhtreeError(RuntimeError):
    pass


class ConfigError(GhtreeError):
    """Missing or invalid credentials/arguments. Fatal."""


class ListError(GhtreeError):
    """Listing the user's repositories failed."""


class CloneError(GhtreeError):
    """git clone failed for a reason other than an existing working copy."""


class LinkFetchError(GhtreeError):
    """Fetching fork lineage (parent/source) failed."""


class RemoteAddError(GhtreeError):
    """git remote add failed for a reason other than an existing remote."""
