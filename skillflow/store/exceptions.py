"""
Custom exceptions for the demo profile store.
"""


class ProfileNotFoundError(LookupError):
    """Raised when no demo profile is registered under a username."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Profile {username} not found")
        self.username = username
