"""MTG Deck Assistant - mana base, curve and synergy analysis for MTG decks."""

__version__ = "0.3.0"
