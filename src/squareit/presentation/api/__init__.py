"""FastAPI presentation layer for the SquareIt service."""
