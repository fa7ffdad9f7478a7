"""
User search module exceptions.
"""

from shared.exceptions import NotFoundError


class RealmNotFoundError(NotFoundError):
    """Raised when the requested realm does not exist."""

    def __init__(self, realm_name: str):
        super().__init__(
            f"Realm not found: {realm_name}",
            code="REALM_NOT_FOUND",
            details={"realm": realm_name},
        )
