"""Domain protocols - interfaces for all source implementations.

Using protocols lets any object with the right methods act as a source, and
keeps tests free to use lightweight stand-ins.
"""

from prompter.domain.protocols.source import MarkableSource, Source

__all__ = [
    "MarkableSource",
    "Source",
]
