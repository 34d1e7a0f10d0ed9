"""
Model enums.
"""
from enum import Enum


class PracticeDirection(str, Enum):
    """Which face of a card is shown as the question."""
    FRONT_TO_BACK = "FRONT_TO_BACK"
    BACK_TO_FRONT = "BACK_TO_FRONT"
