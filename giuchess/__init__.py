"""Bitboard chess engine with move generation, alpha-beta search, and XBoard and UCI front ends."""

__version__ = "2.0.0"