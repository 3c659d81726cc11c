"""Pydantic models for reconstructed card sets.

ColumnGroup is the structural key the accumulator uses to track an open set
within each row.  Card, Edition and CardSet are the finalized output units
handed to the storage sink and the upload endpoint.
"""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Suite(str, Enum):
    """Closed set of card kinds; serialized lowercase."""

    PROMPT = "prompt"
    RESPONSE = "response"


class ColumnGroup(BaseModel):
    """Column positions of one set within a row: (suite, text, special).

    Frozen so it is hashable and can key the open-set map.  Two groups are
    equal only when all three positions match.
    """

    model_config = ConfigDict(frozen=True)

    suite_col: int = Field(ge=0)
    text_col: int = Field(ge=0)
    special_col: int = Field(ge=0)

    def as_tuple(self) -> tuple[int, int, int]:
        """Return the triple in (suite, text, special) order."""
        return (self.suite_col, self.text_col, self.special_col)


class EditionColumn(BaseModel):
    """An edition column found in a row, before it is attached to a set."""

    model_config = ConfigDict(frozen=True)

    marker_col: int = Field(ge=0)
    column: int = Field(ge=0)
    label: str


class Edition(BaseModel):
    """A named regional/version variant column belonging to one set."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    set_id: uuid.UUID
    column: int = Field(ge=0)
    label: str


class Card(BaseModel):
    """One prompt or response card."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    suite: Suite
    text: str
    special: str = ""
    editions: tuple[uuid.UUID, ...] = ()


class CardSet(BaseModel):
    """A finalized, immutable set of cards reconstructed from one column group's lifetime."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    cards: tuple[Card, ...] = ()
    editions: tuple[Edition, ...] = ()

    @model_validator(mode="after")
    def validate_edition_refs(self) -> "CardSet":
        """Ensure every card only references editions owned by this set."""
        known = {edition.id for edition in self.editions}
        for i, card in enumerate(self.cards):
            unknown = [e for e in card.editions if e not in known]
            if unknown:
                raise ValueError(f"Card {i} references {len(unknown)} edition(s) not in set {self.name!r}")
        return self

    @property
    def prompts(self) -> list[Card]:
        """Cards whose suite is PROMPT, in sheet order."""
        return [c for c in self.cards if c.suite is Suite.PROMPT]

    @property
    def responses(self) -> list[Card]:
        """Cards whose suite is RESPONSE, in sheet order."""
        return [c for c in self.cards if c.suite is Suite.RESPONSE]
