from .runner import main

__all__ = ["main"]
