"""Error taxonomy shared by the discovery services.

Empty results are never an error; these exceptions only describe requests
that could not be answered.
"""

from typing import Optional


class SearchError(Exception):
    """Base class for discovery failures surfaced to the caller."""


class ValidationError(SearchError, ValueError):
    """Raised by the query normalizer for structurally invalid filters."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_detail(self) -> dict:
        return {"field": self.field, "message": self.message}


class StoreError(SearchError):
    """A catalog or member store read failed. Never retried here."""

    def __init__(self, store: str, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(f"{store} store read failed: {message}")
        self.store = store
        self.message = message
        self.cause = cause


class SkillNotFoundError(SearchError, LookupError):
    def __init__(self, skill_id):
        super().__init__(f"Skill not found: {skill_id}")
        self.skill_id = skill_id
