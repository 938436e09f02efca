# smartcomplete/__init__.py
"""
Minimal init to avoid import-time cycles.

Do NOT import engine/cli/service here.
Keep side effects out of package import.
"""

__version__ = "0.1.0"
__all__: list[str] = ["__version__"]
