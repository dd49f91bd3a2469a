"""Async client for the Banco Inter banking API."""

from .core import *  # noqa: F401,F403
from .core import __all__
