"""Data models for the school bot application.

Defines Pydantic models for the rows the bot reads from and writes to the
database. Column names follow the database; ``class`` is exposed as
``class_name`` because it is a Python keyword.
"""

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """A registered member of a class.

    Attributes:
        id: Row id assigned by the database, None before insert.
        scope_id: Chat the member was registered in, when scoping is enabled.
        first_name: Alphabetic first name.
        class_name: Free-text class label, matched case-insensitively.
        age: Age in years, 5 to 120.
        added_by: Telegram user id of whoever registered the member.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    scope_id: int | None = None
    first_name: str
    class_name: str = Field(alias="class")
    age: int = Field(ge=5, le=120)
    added_by: int

    def to_row(self) -> dict[str, object]:
        """Return the insert payload, omitting database-assigned columns."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})


class ExplanationRecord(BaseModel):
    """A generated explanation saved after a successful /explain.

    Attributes:
        topic: Topic the user asked about.
        word_limit: Requested length, 10 to 1000 words.
        user_id: Telegram user id of the requester.
        scope_id: Chat the request came from, when scoping is enabled.
        response: Generated text truncated to ``word_limit`` words.
    """

    topic: str
    word_limit: int = Field(ge=10, le=1000)
    user_id: int
    scope_id: int | None = None
    response: str

    def to_row(self) -> dict[str, object]:
        """Return the insert payload."""
        return self.model_dump(exclude_none=True)


class GroupMember(BaseModel):
    """Entry of the externally maintained alert roster."""

    scope_id: int
    user_id: int
