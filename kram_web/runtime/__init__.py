"""
Runtime — Store and scene dispatch semantics of the generated module.

The emitted module.js carries its own JavaScript runtime; this package
implements the same semantics in Python for hosts that execute scenes
themselves and as the executable reference for the emitted code.
"""

from .store import Store, StoreNode
from .mount import Capabilities, MountedProgram, mount

__all__ = [
    'Store',
    'StoreNode',
    'Capabilities',
    'MountedProgram',
    'mount',
]
