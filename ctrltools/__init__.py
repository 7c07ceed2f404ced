"""DeepCopy code generation for modelled Go API types, and terminal help for markers."""

__version__ = "0.1.0"