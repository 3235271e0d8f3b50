"""agentdocs — load, lint and export agent definition documents."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("agentdocs")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback for development
