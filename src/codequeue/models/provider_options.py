"""Provider metadata models: where new items land and what columns exist.

These models describe boards, lists and status columns as reported by a
provider. They carry no lifecycle of their own; configuration commands use
them to pick targets and the reconciler never inspects them.
"""

from pydantic import BaseModel, Field


class StatusOption(BaseModel):
    """A column/status a new item can be placed in."""

    id: str
    name: str
    parent_id: str = ""  # e.g. field ID for GitHub, board ID for Trello


class StatusField(BaseModel):
    """A single-select field together with its options."""

    field_id: str
    options: list[StatusOption] = Field(default_factory=list)

    def find_option(self, name: str) -> StatusOption | None:
        """Find an option by name, case-insensitively."""
        wanted = name.strip().lower()
        for option in self.options:
            if option.name.lower() == wanted:
                return option
        return None


class ProjectOption(BaseModel):
    """A board/project/list that tasks can be published to."""

    id: str
    label: str
    detail: str = ""
