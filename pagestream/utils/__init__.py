"""Utility helpers."""

from .atomic import AtomicCounter, OnceCell

__all__ = ["AtomicCounter", "OnceCell"]
