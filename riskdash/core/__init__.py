"""riskdash core: models, normalization pipeline, providers and services."""
