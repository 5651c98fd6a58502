"""HTTP API for the Warden service."""

from warden.presentation.api.app import create_app

__all__ = ["create_app"]
