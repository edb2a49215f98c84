"""
Identifiants DOM uniques pour les instances de blocs d'un même rendu.

Un BlockIdCounter vit le temps d'une session de rendu (une page, une
requête). Il ne doit jamais être partagé entre deux rendus concurrents.
"""
import re
import unicodedata
from typing import Any, Callable, Dict, Mapping, Optional, Union

# Champs du contexte de rendu qui remplacent l'id candidat, par priorité
UNIQUE_ID_FIELDS = ("html_anchor", "title", "headline", "heading", "header")

FieldSource = Union[Mapping[str, Any], Callable[[str], Any]]


def slugify(text: str) -> str:
    """Équivalent sanitize-title : "Mon Titre Été !" → "mon-titre-ete", "v1.2" → "v1-2"."""
    text = unicodedata.normalize("NFKD", str(text)).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"<[^>]*>", "", text).replace(".", "-")
    text = re.sub(r"[^a-z0-9_\s-]", "", text.lower())
    return re.sub(r"[\s-]+", "-", text).strip("-")


def get_context_field(fields: Optional[FieldSource], name: str) -> Any:
    """Accès uniforme au contexte : mapping ou callable `get_field(name)`."""
    if fields is None:
        return None
    if callable(fields):
        return fields(name)
    return fields.get(name)


class BlockIdCounter:
    """Compteur base-id → occurrences, propre à une session de rendu."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}

    def resolve_candidate(self, candidate: str, fields: Optional[FieldSource] = None) -> str:
        for key in UNIQUE_ID_FIELDS:
            value = get_context_field(fields, key)
            if value:
                return slugify(value)
        return candidate

    def next_unique_id(self, candidate: str, fields: Optional[FieldSource] = None) -> str:
        """
        1er appel pour un id → id inchangé, puis "{id}-2", "{id}-3"…
        L'id peut d'abord être remplacé par un champ du contexte (UNIQUE_ID_FIELDS).
        """
        block_id = self.resolve_candidate(candidate, fields)

        if block_id in self._counts:
            self._counts[block_id] += 1
            return f"{block_id}-{self._counts[block_id]}"

        self._counts[block_id] = 1
        return block_id

    def reset(self) -> None:
        self._counts.clear()

    def __len__(self) -> int:
        return len(self._counts)
