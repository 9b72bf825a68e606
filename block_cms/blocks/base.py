"""
Bloc de base — identité, taille, capacité de visite des séquences enfants.
"""
from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict

# Les ids historiques sont des floats (ms + suffixe aléatoire), les nouveaux
# peuvent être des str ou des int selon le générateur injecté.
BlockId = Union[int, float, str]
BlockSize = Literal["small", "medium", "large", "full"]


class BaseBlock(BaseModel):
    """Bloc de base (classe parente des cinq variantes)."""
    model_config = ConfigDict(populate_by_name=True)

    type: str
    id: BlockId
    size: BlockSize = "full"

    def has_child_sequences(self) -> bool:
        return False

    def child_sequences(self) -> List[list]:
        """Séquences enfants dans l'ordre du document. Vide pour une feuille."""
        return []
