"""pgnscope: PGN move trees annotated with the board after every move."""

__version__ = "0.1.0"
