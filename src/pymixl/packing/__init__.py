"""Row-based packing of upper-triangular factors."""

from pymixl.packing._triu import mattriu, triangular_dim, vectriu

__all__ = ["vectriu", "mattriu", "triangular_dim"]
