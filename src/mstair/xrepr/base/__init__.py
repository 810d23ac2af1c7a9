"""
package: mstair.xrepr.base
"""

# <AUTOGEN_INIT>
from mstair.xrepr.base import (
    config,
    fs_helpers,
    types,
)


__all__ = [
    "config",
    "fs_helpers",
    "types",
]
# </AUTOGEN_INIT>
