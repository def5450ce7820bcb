"""
Modloader - dependency ordering and staged lifecycle for mods

Orders a set of independently authored mods by their declared requirements,
conflicts and ordering hints, then drives every mod through the fixed
configure / pre-init / init / listener lifecycle.
"""

__version__ = "0.24.0"
__all__ = ["__version__"]
