"""
Schéma Pydantic d'un bloc découvert sur disque.

Les champs scalaires acceptent `bool` en plus de `str` : un en-tête dont la
valeur brute est exactement "true" / "false" est converti en booléen.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Scalar = Union[bool, str]
SupportValue = Union[bool, List[str], str]


class BlockDescriptor(BaseModel):
    """Un bloc : métadonnées d'en-tête + identité (slug) + fichier template."""
    model_config = ConfigDict(extra="allow")

    slug: str
    name: str
    title: Scalar
    template_file: str

    description: Optional[Scalar] = None
    category: Optional[Scalar] = None
    icon: Optional[Scalar] = None
    mode: Optional[Scalar] = None
    align: Optional[Scalar] = None
    context: Optional[Scalar] = None
    enqueue_style: Optional[Scalar] = None
    enqueue_script: Optional[Scalar] = None
    enqueue_assets: Optional[Scalar] = None

    keywords: Optional[List[str]] = None
    post_types: Optional[List[str]] = None
    supports: Optional[Dict[str, SupportValue]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Forme dict attendue par les registrars hôtes (champs absents omis)."""
        return self.model_dump(exclude_none=True)
