"""Routers mounted by ``api.app.create_app``."""
