"""Errors raised while loading the project index."""


class ProjectIntelError(Exception):
    """Base class for all project-intel errors."""


class IndexNotFoundError(ProjectIntelError):
    """The index file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"PROJECT_INDEX.json not found at: {path}\n\n"
            "Please generate the index first, for example by running your "
            "project's index generation script.\n"
            "The index file should be in your project root directory."
        )


class InvalidIndexError(ProjectIntelError):
    """The index file is not valid JSON or does not have the expected shape."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        self.reason = reason
        message = (
            f"Invalid index in {path}\n\n"
            "The PROJECT_INDEX.json file appears to be corrupted or invalid.\n"
            "Please regenerate it using your index generation script."
        )
        if reason:
            message += f"\n\nDetails: {reason}"
        super().__init__(message)
