"""
steps.py

The Step value type: a single identifier from an ordered alphabet,
with a duration derived from its position in that alphabet.
"""

import string
from dataclasses import dataclass

from stepsched.errors import MalformedInput

ALPHABET = string.ascii_uppercase


@dataclass(frozen=True, order=True)
class Step:
    """
    One work step, identified by a single character.

    Ordering and hashing are by alphabet position, so A < B < ... < Z.

    Attributes:
      - ordinal (int): 0-based position of the identifier in ALPHABET
    """
    ordinal: int

    @classmethod
    def from_char(cls, char):
        """Return the Step for `char`; raise MalformedInput if it is not in ALPHABET."""
        if len(char) != 1 or char not in ALPHABET:
            raise MalformedInput(f"'{char}' is not a step identifier ({ALPHABET[0]}-{ALPHABET[-1]}).")
        return cls(ALPHABET.index(char))

    @property
    def name(self):
        return ALPHABET[self.ordinal]

    def duration(self, base_time=0):
        """Seconds of work for this step: position (1-based) plus base_time."""
        return self.ordinal + 1 + base_time

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"<Step {self.name}>"


def steps_from_string(names):
    """Convenience: "CAB" -> the steps C, A, B in that order."""
    return [Step.from_char(c) for c in names]
