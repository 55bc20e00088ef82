"""
riskdash web API.
"""

from riskdash.web.app import create_app

__all__ = ["create_app"]
