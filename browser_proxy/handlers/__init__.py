"""Connection handlers for the proxy front door."""
