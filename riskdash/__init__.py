"""riskdash - financial risk indicators with rolling z-scores."""

__version__ = "0.1.0"
