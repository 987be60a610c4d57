"""Advise-build loop for porting native projects to WebAssembly."""

__version__ = "0.1.0"
