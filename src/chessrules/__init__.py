"""chessrules - a chess rules engine with SAN, FEN and long coordinate I/O."""

__version__ = "0.1.0"
