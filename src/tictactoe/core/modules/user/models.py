from pydantic import BaseModel, ConfigDict, Field

from tictactoe.utils import generate_id


class UserStats(BaseModel):
    total: int = 0
    won: int = 0


class GameModeStats(BaseModel):
    local: UserStats = Field(default_factory=UserStats)
    online: UserStats = Field(default_factory=UserStats)


class User(BaseModel):
    """User domain model including the secret that proves ownership."""

    id: str = Field(default_factory=generate_id)
    nickname: str
    secret: str = Field(default_factory=generate_id)
    stats: GameModeStats = Field(default_factory=GameModeStats)
    friends: list[str] = Field(default_factory=list)  # Missing on records written before friends existed

    model_config = ConfigDict(extra="allow")


class UserView(BaseModel):
    """User information without the secret (API representation)."""

    id: str = Field(..., description="User ID")
    nickname: str = Field(..., description="Unique nickname")
    stats: GameModeStats = Field(..., description="Won/total counters per game mode")
    friends: list[str] = Field(..., description="IDs of befriended users")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, nickname=user.nickname, stats=user.stats, friends=user.friends)
