"""Secrets and authentication related configuration."""

import os


# Shared secret every relay upgrade must present (all paths except the health check)
AUTH_TOKEN = os.getenv("REMOTE_BROWSER_SERVER_AUTH_TOKEN", "")


__all__ = ["AUTH_TOKEN"]
