"""Factory helpers for battle snapshots."""

from .combatant_factory import create_combatant

__all__ = [
    "create_combatant",
]
