"""Core package initializer for undoline.

Subpackages:
    undoline.core.history    the undo/redo state machine
    undoline.core.contracts  validated option models
"""

from __future__ import annotations

__all__ = ["__doc__"]
