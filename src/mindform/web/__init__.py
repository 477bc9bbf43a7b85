"""
Web surface: generation API, shared forms and the owner API.
"""

from mindform.web.app import create_app

__all__ = ["create_app"]
