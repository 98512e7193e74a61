"""Chess rules engine: pieces, board and move legality, move history, draw rules, saved games and notation."""

__version__ = "0.1.0"