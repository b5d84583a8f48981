"""transmeta API package.

An optional FastAPI service around catalog reading and header normalization.
"""

from .server import create_app  # noqa: F401
