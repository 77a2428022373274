"""Catalog rules: evolution-chain depth, generation numbers and the daily pick.

Evolution chains arrive as nested trees::

    {"species": "bulbasaur", "evolves_to": [{"species": "ivysaur", "evolves_to": [...]}]}

They are flattened into an arena (a list of nodes addressed by index) and
walked with an explicit stack, so chain depth never grows the Python stack.
"""

import re
from dataclasses import dataclass, field
from datetime import date

import numpy as np

ROMAN_NUMERALS = {
    "i": 1,
    "ii": 2,
    "iii": 3,
    "iv": 4,
    "v": 5,
    "vi": 6,
    "vii": 7,
    "viii": 8,
    "ix": 9,
}

GENERATION_PATTERN = re.compile(r"generation-(\w+)")


@dataclass
class ChainNode:
    species: str
    depth: int
    children: list[int] = field(default_factory=list)


def flatten_chain(chain: dict) -> list[ChainNode]:
    """Flatten a nested evolution chain into an arena of ChainNode.

    Index 0 is the root. Children appear in the same order as in evolves_to.
    """
    arena = [ChainNode(species=str(chain["species"]).lower(), depth=0)]
    stack = [(0, chain)]
    while stack:
        index, raw_node = stack.pop()
        for raw_child in raw_node.get("evolves_to") or []:
            child_index = len(arena)
            arena.append(
                ChainNode(
                    species=str(raw_child["species"]).lower(),
                    depth=arena[index].depth + 1,
                )
            )
            arena[index].children.append(child_index)
            stack.append((child_index, raw_child))
    return arena


def evolution_info(chain: dict, species_name: str) -> tuple[int, bool]:
    """Return (evolution_count, is_final_evolution) of species_name in chain.

    A species missing from its own chain is treated as a single-stage Pokemon: (0, True).
    """
    target = species_name.lower()
    for node in flatten_chain(chain):
        if node.species == target:
            return node.depth, not node.children
    return 0, True


def generation_number(generation_name: str) -> int:
    """Convert "generation-iv" to 4. Unparseable names count as generation 1."""
    match = GENERATION_PATTERN.search(generation_name.lower())
    if not match:
        return 1
    numeral = match.group(1)
    if numeral in ROMAN_NUMERALS:
        return ROMAN_NUMERALS[numeral]
    if numeral.isdigit() and int(numeral) > 0:
        return int(numeral)
    return 1


def pick_daily_index(day: date, catalog_size: int) -> int:
    """Deterministically pick a catalog index for the given date."""
    if catalog_size < 1:
        raise ValueError("catalog_size must be a positive integer")
    rng = np.random.default_rng(day.toordinal())
    return int(rng.integers(0, catalog_size))
