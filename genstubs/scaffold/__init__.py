"""Generator framework: declare arguments and options in the class body."""

from .base import Argument, Generator, GeneratorArgumentError, Option
from .named import ModelGenerator, NamedGenerator

__all__ = [
    "Argument",
    "Generator",
    "GeneratorArgumentError",
    "ModelGenerator",
    "NamedGenerator",
    "Option",
]
