from .loader import Slurp

__all__ = ["Slurp"]
