"""pth-manager — directory-scoped .pth injection for virtual environments."""

__version__ = "0.1.0"
