"""
package: mstair.xrepr

Short, bounded, human-readable representations of arbitrary values,
plus a logger that uses them for its arguments.
"""

# <AUTOGEN_INIT>
from mstair.xrepr import (
    base,
    generator,
    identity,
    model,
    repr_api,
    xlogging,
)
from mstair.xrepr.generator import Generator
from mstair.xrepr.model import Representable
from mstair.xrepr.repr_api import xrepr


__all__ = [
    "Generator",
    "Representable",
    "base",
    "generator",
    "identity",
    "model",
    "repr_api",
    "xlogging",
    "xrepr",
]
# </AUTOGEN_INIT>

__version__ = "0.1.0"
