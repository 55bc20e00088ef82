"""
Web API routes.
"""

from riskdash.web.metrics import router as metrics_router
from riskdash.web.routes.health_routes import router as health_router
from riskdash.web.routes.indicator_routes import router as indicator_router
from riskdash.web.routes.putcall_routes import router as putcall_router

__all__ = ["health_router", "indicator_router", "metrics_router", "putcall_router"]
