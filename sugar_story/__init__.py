"""Sugar story: a three-scene visual narrative about sugar in beverages."""

__version__ = "0.1.0"
