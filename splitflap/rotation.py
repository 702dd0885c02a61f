"""
Rotation - Computes the flip path between two symbols
A physical flap only turns forward, so every path walks the alphabet in
increasing order and wraps at the end.
"""

from typing import List

from .alphabet import Alphabet, DEFAULT_ALPHABET


def rotation_sequence(from_symbol: str, to_symbol: str,
                      alphabet: Alphabet = DEFAULT_ALPHABET) -> List[str]:
    """
    Symbols to display, in order, to move a flap from one symbol to another.

    Args:
        from_symbol: Symbol currently shown
        to_symbol: Symbol to land on
        alphabet: Alphabet the flap cycles through

    Returns:
        List of intermediate symbols ending with to_symbol, empty when no flip is needed
    """
    if from_symbol == to_symbol:
        return []

    current_index = alphabet.index_of(from_symbol)
    target_index = alphabet.index_of(to_symbol)

    if current_index is None and target_index is None:
        # Nothing to cycle through - snap
        return [to_symbol]

    if current_index is None:
        # Unknown start - cycle from the beginning
        return list(alphabet[:target_index + 1])

    if target_index is None:
        # Unknown target - run out the alphabet, then land on it
        return list(alphabet[current_index + 1:]) + [to_symbol]

    if target_index > current_index:
        return list(alphabet[current_index + 1:target_index + 1])

    return list(alphabet[current_index + 1:]) + list(alphabet[:target_index + 1])
