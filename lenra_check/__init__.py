# -----------------------------------------------------------------------------
# LENRA CHECK
# -----------------------------------------------------------------------------
# Validates a locally running Lenra app against its declared structure:
# - domain: manifest routes and check outcomes
# - core: matcher, checker framework, check lists and reporting
# - infra: app client, JSON Schema validation, docker preflight
# -----------------------------------------------------------------------------

__version__ = "0.1.0"
