"""
Erreurs du modèle de blocs.

Seule InvalidVariant remonte à l'appelant en usage normal. ParseFailure est
récupérée localement par la migration, StructuralViolation n'est levée qu'en
mode strict ou sur tentative de changement de type / d'id.
"""


class BlockModelError(ValueError):
    """Erreur de base du modèle de blocs."""


class InvalidVariant(BlockModelError):
    """Type de bloc inconnu demandé à la factory ou au parseur."""

    def __init__(self, block_type, known=()):
        self.block_type = block_type
        msg = f"Type de bloc inconnu : {block_type!r}"
        if known:
            msg += f". Types : {list(known)}"
        super().__init__(msg)


class ParseFailure(BlockModelError):
    """Chaîne encodée (JSON) illisible."""


class StructuralViolation(BlockModelError):
    """Opération qui casserait la structure de l'arbre (ex : déplacement inter-conteneurs)."""
