"""nixdoc - documentation search for Nix function definitions."""

__version__ = "0.3.0"
