# File: phrasecoach/core/common/enums.py

from enum import Enum, unique

@unique
class Level(str, Enum):
    BEGINNING = "beginning"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
