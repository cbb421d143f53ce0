from carepair.api.app import app, build_handler, create_app

__all__ = ["app", "build_handler", "create_app"]
