# File: phrasecoach/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Course and Phrase models inherit from this.
Base = declarative_base()
