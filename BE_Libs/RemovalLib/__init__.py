"""
RemovalLib - Automatic background removers

This module provides the two pixel-classification removers and a
registry used to pick one by algorithm name.
"""

from typing import Dict, Type

from BE_Libs.constants import ALGORITHM_BORDER_MODEL, ALGORITHM_FLOOD_FILL
from BE_Libs.RemovalLib.base import Remover
from BE_Libs.RemovalLib.flood_fill_remover import FloodFillRemover, remove_flood_fill
from BE_Libs.RemovalLib.border_model_remover import BorderModelRemover, remove_border_model


REMOVER_REGISTRY: Dict[str, Type[Remover]] = {
    ALGORITHM_FLOOD_FILL: FloodFillRemover,
    ALGORITHM_BORDER_MODEL: BorderModelRemover,
}


def get_remover(algorithm: str) -> Remover:
    """
    Instantiate the remover registered for an algorithm name.

    Raises:
        ValueError: If the algorithm is unknown
    """
    key = str(algorithm).strip().upper()
    if key not in REMOVER_REGISTRY:
        raise ValueError(f"Unknown algorithm '{algorithm}'. Choices: {list(REMOVER_REGISTRY)}")
    return REMOVER_REGISTRY[key]()


__all__ = [
    "Remover",
    "FloodFillRemover",
    "BorderModelRemover",
    "REMOVER_REGISTRY",
    "get_remover",
    "remove_flood_fill",
    "remove_border_model",
]
