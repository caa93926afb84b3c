class GameRecoError(Exception):
    """Parent class for all gamereco exceptions."""

    pass


class InvalidVectorError(GameRecoError, ValueError):
    """Raised when a tag vector receives an invalid tag key or weight."""

    pass


class CatalogError(GameRecoError):
    """Raised when the game catalog cannot be read or parsed."""

    pass
