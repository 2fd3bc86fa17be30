"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a battle snapshot cannot be created."""


class PlayerNotFoundError(Exception):
    """Raised when the player repository has no row for an id."""


class InvalidTurnsError(Exception):
    """Raised when an attack asks for more turns than the attacker holds."""


class BattleLogError(Exception):
    """Raised when battle log entries cannot be stored or restored."""
