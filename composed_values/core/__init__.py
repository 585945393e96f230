"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the composed value
engine, independent of any consumer (UI, persistence, game logic).
"""
