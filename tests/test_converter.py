"""Tests for DataConverter.convert_to_game_state"""
from datetime import timedelta

import pytest
from uuid6 import uuid7

from pokedle.converter import DataConverter
from pokedle.domain.session_rules import admit_guess, new_session
from pokedle.models.schema_models import GameGuessSchema, OrdinalVerdict


@pytest.fixture
def data_converter() -> DataConverter:
    return DataConverter()


def build_guess(session_id, guess_number, pokemon, is_correct, created_at) -> GameGuessSchema:
    return GameGuessSchema(
        guess_id=uuid7(),
        session_id=session_id,
        guess_number=guess_number,
        guessed_pokemon_id=pokemon.id,
        is_correct=is_correct,
        created_at=created_at,
    )


def test_guesses_sorted_by_guess_number(
    data_converter, sample_datetime, pikachu, charmander, charizard, squirtle
):
    session = new_session("session-1", uuid7(), 6, sample_datetime).model_copy(
        update={"current_guesses": 3}
    )
    # Arrival order 3, 1, 2
    guesses = [
        (build_guess("session-1", 3, squirtle, False, sample_datetime), squirtle),
        (build_guess("session-1", 1, charmander, False, sample_datetime + timedelta(seconds=1)), charmander),
        (build_guess("session-1", 2, charizard, False, sample_datetime + timedelta(seconds=2)), charizard),
    ]

    state = data_converter.convert_to_game_state(session, pikachu, guesses)

    assert [result.guess.guess_number for result in state.guesses] == [1, 2, 3]
    assert [result.pokemon.name for result in state.guesses] == ["charmander", "charizard", "squirtle"]


def test_target_hidden_while_active(data_converter, sample_datetime, pikachu, charmander):
    session = new_session("session-1", uuid7(), 6, sample_datetime)
    session, guess = admit_guess(session, charmander.id, pikachu.id, sample_datetime)

    state = data_converter.convert_to_game_state(session, pikachu, [(guess, charmander)])

    assert state.target_pokemon is None
    assert state.can_guess is True
    # charmander (0) vs pikachu (1)
    assert state.guesses[0].feedback.evolution_count == OrdinalVerdict.higher


def test_target_revealed_when_completed(data_converter, sample_datetime, pikachu):
    session = new_session("session-1", uuid7(), 6, sample_datetime)
    session, guess = admit_guess(session, pikachu.id, pikachu.id, sample_datetime)

    state = data_converter.convert_to_game_state(session, pikachu, [(guess, pikachu)])

    assert state.target_pokemon == pikachu
    assert state.can_guess is False
    assert state.session.is_won is True


def test_empty_ledger(data_converter, sample_datetime, pikachu):
    session = new_session("session-1", uuid7(), 6, sample_datetime)

    state = data_converter.convert_to_game_state(session, pikachu, [])

    assert state.guesses == []
    assert state.target_pokemon is None
    assert state.can_guess is True
