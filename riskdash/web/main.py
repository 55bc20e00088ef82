"""
Web server entry point.
"""

import os

import uvicorn


def riskdash_main() -> None:
    """Start the FastAPI web service."""

    host = os.getenv("RISKDASH_HOST", "0.0.0.0")
    port = int(os.getenv("RISKDASH_PORT", "8000"))
    reload = os.getenv("RISKDASH_RELOAD", "false").lower() == "true"

    uvicorn.run("riskdash.web.app:create_app", factory=True, host=host, port=port, reload=reload, log_level="info")


if __name__ == "__main__":
    riskdash_main()
