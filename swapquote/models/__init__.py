"""Data models for the quoting engine and its HTTP surface.

Import from the submodules directly: `swapquote.models.types` is a leaf
that `swapquote.constants` depends on.
"""
