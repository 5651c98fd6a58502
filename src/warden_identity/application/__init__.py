"""Application layer: credential, session and request authentication services."""
