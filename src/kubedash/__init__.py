"""kubedash - a small web dashboard over kubectl.

Reports pod status, tails logs and triggers rollout restarts for a fixed set
of services in one namespace.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
