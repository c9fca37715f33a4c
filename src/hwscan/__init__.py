"""
HWSCAN
------

Point-in-time hardware inventory and stable machine identification for
diagnostic boot environments.
"""

__version__ = "1.0.0"
