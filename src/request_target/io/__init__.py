from .data import iter_text

__all__ = ["iter_text"]
