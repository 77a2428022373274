from typing import List

from pokedle.domain.feedback_rules import compute_feedback
from pokedle.domain.session_rules import can_guess
from pokedle.models.schema_models import (
    GameGuessSchema,
    GameSessionSchema,
    GameStateSchema,
    GuessResultSchema,
    PokemonSchema,
)


class DataConverter:
    """This class is used to assemble the data sent to the client."""

    def convert_to_game_state(
        self,
        game_session: GameSessionSchema,
        target_pokemon: PokemonSchema,
        guesses: List[tuple[GameGuessSchema, PokemonSchema]],
    ) -> GameStateSchema:
        """Build the game state of a session

        Args:
            game_session (GameSessionSchema): The session as stored
            target_pokemon (PokemonSchema): The daily target of the session
            guesses (List[tuple[GameGuessSchema, PokemonSchema]]): Guess ledger in any order

        Returns:
            GameStateSchema: Guesses sorted by guess_number with feedback. The
                target is only included once the session is completed.
        """
        ordered_guesses = sorted(guesses, key=lambda item: item[0].guess_number)
        guess_results = [
            GuessResultSchema(
                guess=guess,
                pokemon=pokemon,
                feedback=compute_feedback(pokemon, target_pokemon),
            )
            for guess, pokemon in ordered_guesses
        ]

        return GameStateSchema(
            session=game_session,
            target_pokemon=target_pokemon if game_session.is_completed else None,
            guesses=guess_results,
            can_guess=can_guess(game_session),
        )
