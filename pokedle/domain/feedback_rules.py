"""Per-attribute comparison of a guessed Pokemon against the daily target.

Ordinal attributes (evolution_count, generation) answer the question
"where is the target compared to my guess?":

- OrdinalVerdict.higher: the target's value is above the guess, guess higher next.
- OrdinalVerdict.lower: the target's value is below the guess, guess lower next.
"""

from pokedle.models.schema_models import (
    GuessFeedbackSchema,
    MatchVerdict,
    OrdinalVerdict,
    PokemonSchema,
)


def compare_categorical(guessed: object, target: object) -> MatchVerdict:
    """Equal values (None == None included) are correct, anything else is incorrect."""
    if guessed == target:
        return MatchVerdict.correct
    return MatchVerdict.incorrect


def compare_ordinal(guessed: int, target: int) -> OrdinalVerdict:
    if guessed == target:
        return OrdinalVerdict.correct
    if target > guessed:
        return OrdinalVerdict.higher
    return OrdinalVerdict.lower


def compute_feedback(candidate: PokemonSchema, target: PokemonSchema) -> GuessFeedbackSchema:
    """Compare every feedback attribute of the candidate with the target.

    Args:
        candidate (PokemonSchema): The guessed Pokemon
        target (PokemonSchema): The daily target Pokemon

    Returns:
        GuessFeedbackSchema: One verdict for each of the seven attributes
    """
    return GuessFeedbackSchema(
        type1=compare_categorical(candidate.type1, target.type1),
        type2=compare_categorical(candidate.type2, target.type2),
        evolution_count=compare_ordinal(candidate.evolution_count, target.evolution_count),
        is_final_evolution=compare_categorical(
            candidate.is_final_evolution, target.is_final_evolution
        ),
        color=compare_categorical(candidate.color, target.color),
        habitat=compare_categorical(candidate.habitat, target.habitat),
        generation=compare_ordinal(candidate.generation, target.generation),
    )
