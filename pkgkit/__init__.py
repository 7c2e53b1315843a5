"""
PkgKit Core Modules

This package contains the core functionality of PkgKit including:
- Package manager detection and command dispatch
- Position-sensitive argument handling
- Permission checks and package list installation
- Configuration and logging
"""

__version__ = "0.1.0"
__all__ = ['__version__']
