from .base import AgeSource, SourceFactory
from .memory import InMemorySource, InMemorySourceFactory
from .text import DirectorySourceFactory, TextFileSource

__all__ = [
    "AgeSource",
    "DirectorySourceFactory",
    "InMemorySource",
    "InMemorySourceFactory",
    "SourceFactory",
    "TextFileSource",
]
