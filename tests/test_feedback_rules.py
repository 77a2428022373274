"""Tests for the per-attribute feedback computation."""
from pokedle.domain.feedback_rules import compare_categorical, compare_ordinal, compute_feedback
from pokedle.models.schema_models import MatchVerdict, OrdinalVerdict

FEEDBACK_FIELDS = (
    "type1",
    "type2",
    "evolution_count",
    "is_final_evolution",
    "color",
    "habitat",
    "generation",
)


def test_same_pokemon_is_correct_everywhere(pikachu, charizard, make_pokemon):
    no_optional = make_pokemon(id=132, name="ditto", type2=None, habitat=None)
    for pokemon in (pikachu, charizard, no_optional):
        feedback = compute_feedback(pokemon, pokemon)
        for field in FEEDBACK_FIELDS:
            assert getattr(feedback, field).value == "correct"


def test_scenario_fire_flying_guess_against_electric_target(make_pokemon):
    target = make_pokemon(
        type1="electric",
        type2=None,
        evolution_count=2,
        is_final_evolution=False,
        color="yellow",
        habitat="forest",
        generation=1,
    )
    guess = make_pokemon(
        id=6,
        name="charizard",
        type1="fire",
        type2="flying",
        evolution_count=3,
        is_final_evolution=True,
        color="red",
        habitat="mountain",
        generation=1,
    )

    feedback = compute_feedback(guess, target)

    assert feedback.type1 == MatchVerdict.incorrect
    assert feedback.type2 == MatchVerdict.incorrect
    # target (2) is below the guess (3)
    assert feedback.evolution_count == OrdinalVerdict.lower
    assert feedback.is_final_evolution == MatchVerdict.incorrect
    assert feedback.color == MatchVerdict.incorrect
    assert feedback.habitat == MatchVerdict.incorrect
    assert feedback.generation == OrdinalVerdict.correct


def test_higher_means_target_value_is_above_guess(make_pokemon):
    target = make_pokemon(evolution_count=2, generation=3)
    guess = make_pokemon(evolution_count=0, generation=1)

    feedback = compute_feedback(guess, target)

    assert feedback.evolution_count == OrdinalVerdict.higher
    assert feedback.generation == OrdinalVerdict.higher


def test_lower_means_target_value_is_below_guess(make_pokemon):
    target = make_pokemon(evolution_count=0, generation=1)
    guess = make_pokemon(evolution_count=1, generation=4)

    feedback = compute_feedback(guess, target)

    assert feedback.evolution_count == OrdinalVerdict.lower
    assert feedback.generation == OrdinalVerdict.lower


def test_absent_and_present_never_match(make_pokemon):
    target = make_pokemon(type2=None, habitat="forest")
    guess = make_pokemon(type2="flying", habitat=None)

    feedback = compute_feedback(guess, target)

    assert feedback.type2 == MatchVerdict.incorrect
    assert feedback.habitat == MatchVerdict.incorrect


def test_both_absent_match(make_pokemon):
    target = make_pokemon(type2=None, habitat=None)
    guess = make_pokemon(id=4, name="charmander", type1="fire", type2=None, habitat=None)

    feedback = compute_feedback(guess, target)

    assert feedback.type2 == MatchVerdict.correct
    assert feedback.habitat == MatchVerdict.correct
    assert feedback.type1 == MatchVerdict.incorrect


def test_feedback_always_has_seven_fields(pikachu, squirtle):
    feedback = compute_feedback(squirtle, pikachu)
    assert set(feedback.model_dump().keys()) == set(FEEDBACK_FIELDS)


def test_compare_helpers():
    assert compare_categorical("red", "red") == MatchVerdict.correct
    assert compare_categorical(True, False) == MatchVerdict.incorrect
    assert compare_ordinal(1, 1) == OrdinalVerdict.correct
    assert compare_ordinal(1, 5) == OrdinalVerdict.higher
    assert compare_ordinal(5, 1) == OrdinalVerdict.lower
