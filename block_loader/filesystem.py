"""
Accès disque minimal, relatif à un répertoire racine.

Seules trois capacités sont utilisées par le loader : lister les entrées
d'un répertoire (un niveau), tester si un chemin est un fichier régulier,
lire le début d'un fichier.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Filesystem:
    def __init__(self, root: PathLike):
        self.root = Path(root)

    def path(self, name: PathLike = "") -> Path:
        """Chemin absolu d'une entrée relative à la racine."""
        return (self.root / name).resolve()

    def dirlist(self) -> List[Path]:
        """Entrées directes de la racine, triées par nom. Racine absente → []."""
        try:
            return sorted(self.root.iterdir(), key=lambda p: p.name)
        except OSError as e:
            log.debug("dirlist impossible sur %s : %s", self.root, e)
            return []

    def is_file(self, name: PathLike) -> bool:
        """Fichier régulier ? Erreur d'accès (permissions…) → False."""
        try:
            return (self.root / name).is_file()
        except OSError as e:
            log.debug("is_file impossible sur %s : %s", self.root / name, e)
            return False

    @staticmethod
    def read_head(path: PathLike, size: int) -> Optional[str]:
        """Lit au plus `size` octets (UTF-8, erreurs remplacées). Illisible → None."""
        try:
            with open(path, "rb") as f:
                return f.read(size).decode("utf-8", errors="replace")
        except OSError as e:
            log.debug("Lecture impossible %s : %s", path, e)
            return None
