"""kmeta API package.

Optional FastAPI service exposing the inheritance engine, AppArmor
matching and status flag readers over HTTP.
"""

from .server import create_app  # noqa: F401
