from typing import Any

import pydantic

from tictactoe.core.core import Service
from tictactoe.core.modules.game.models import Game
from tictactoe.core.store import Database
from tictactoe.errors import ConflictError, NotFoundError, ValidationError


class GameService(Service):
    """Stores game records on behalf of the clients that play them."""

    async def get_all_games(self) -> list[Game]:
        db = await self.store.load()
        return db.games

    async def get_game(self, game_id: str) -> Game:
        db = await self.store.load()
        game = next((g for g in db.games if g.id == game_id), None)
        if game is None:
            raise NotFoundError(f"Game with ID {game_id} not found")
        return game

    async def create_game(self, game: Game) -> Game:
        def insert(db: Database) -> Game:
            if any(g.id == game.id for g in db.games):
                raise ConflictError(f"Game with ID {game.id} already exists")
            db.games.append(game)
            return game

        return await self.store.with_store(insert)

    async def update_game(self, game_id: str, changes: dict[str, Any]) -> Game:
        """Merge changes into the stored game. The game ID cannot change."""
        if changes.get("id", game_id) != game_id:
            raise ValidationError("Cannot change game ID")

        def merge(db: Database) -> Game:
            idx = next((i for i, g in enumerate(db.games) if g.id == game_id), None)
            if idx is None:
                raise NotFoundError(f"Game with ID {game_id} not found")
            data = db.games[idx].model_dump(by_alias=True)
            data.update(changes)
            try:
                db.games[idx] = Game.model_validate(data)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid game: {e.error_count()} field error(s)") from e
            return db.games[idx]

        return await self.store.with_store(merge)
