"""
Concentration - Memory matching game engine

A small state machine for the classic pairs game. The engine provides:
- Shuffled deals of paired cards
- Tap handling with match resolution
- Delayed, cancellable flip-back of mismatched pairs
- A concealing snapshot for any presentation layer
"""

__version__ = "0.1.0"
