from docswitch._purgers.base import BaseCachePurger
from docswitch._purgers.bunny import BunnyCachePurger

__all__ = [
    "BaseCachePurger",
    "BunnyCachePurger",
]
