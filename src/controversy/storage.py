"""JSON-file store for finalized card sets.

Each set is written as one ``<set id>.json`` file holding the set's name,
its editions and its cards.  The store only consumes the importer's output
(CardSet objects); it never sees the accumulator's open sets.
"""

import json
import logging
import uuid
from pathlib import Path

from controversy.config import sets_dir
from controversy.ingest.schema import CardSet

logger = logging.getLogger(__name__)


class SetStore:
    """Persist and reload card sets under a directory."""

    def __init__(self, root: Path | None = None):
        self.root = Path(root) if root is not None else sets_dir()

    def _path(self, set_id: uuid.UUID | str) -> Path:
        return self.root / f"{set_id}.json"

    def add_set(self, card_set: CardSet) -> Path:
        """Write *card_set* (with its cards) and return the file path."""
        self.root.mkdir(parents=True, exist_ok=True)
        filepath = self._path(card_set.id)
        payload = card_set.model_dump(mode="json")
        filepath.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Stored set %r (%d cards) -> %s", card_set.name, len(card_set.cards), filepath.name)
        return filepath

    def add_sets(self, card_sets: list[CardSet]) -> list[Path]:
        """Write every set in order."""
        return [self.add_set(card_set) for card_set in card_sets]

    def load_set(self, set_id: uuid.UUID | str) -> CardSet:
        """Read one stored set back; raises FileNotFoundError for an unknown id."""
        with open(self._path(set_id), "r", encoding="utf-8") as fopen:
            return CardSet.model_validate(json.load(fopen))

    def list_sets(self) -> list[dict]:
        """Return ``{id, name, card_count}`` summaries of every stored set, sorted by name."""
        if not self.root.exists():
            return []
        summaries: list[dict] = []
        for filepath in self.root.glob("*.json"):
            with open(filepath, "r", encoding="utf-8") as fopen:
                data = json.load(fopen)
            summaries.append({"id": data["id"], "name": data["name"], "card_count": len(data.get("cards", []))})
        return sorted(summaries, key=lambda s: (s["name"], s["id"]))
