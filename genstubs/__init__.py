"""Generate .pyi stubs for members that generator classes declare at runtime."""

__version__ = "0.1.0"
