"""Game configuration"""

from pydantic import BaseModel, ConfigDict, field_validator

from src.chess.color import ChessColor
from src.chess.pieces import PROMOTION_OPTIONS, ChessPieceType
from src.core.exceptions import InvalidArgumentError


class ChessSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_color: ChessColor = ChessColor.WHITE
    # used when no promotion chooser is given, when it declines to choose, and while speculating
    promotion_default: ChessPieceType = ChessPieceType.QUEEN

    @field_validator("promotion_default")
    @classmethod
    def validate_promotion_default(cls, value: ChessPieceType) -> ChessPieceType:
        if value not in PROMOTION_OPTIONS:
            raise InvalidArgumentError(
                f"A pawn can't promote to {value}. Pick one from {', '.join(PROMOTION_OPTIONS)}"
            )
        return value
