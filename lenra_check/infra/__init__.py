# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains the collaborators at the edge of the engine:
# - AppClient: JSON calls to the app under test
# - SchemaValidator: JSON Schema (draft-07) validation
# - DockerProvider: read-only compose service preflight
# -----------------------------------------------------------------------------

from .app_client import DEFAULT_APP_URL, AppCallError, AppClient
from .docker_client import DockerProvider, DockerProviderError, ServiceNotExposedError
from .schema import SchemaError, SchemaValidator, SchemaViolation

__all__ = [
    "DEFAULT_APP_URL", "AppCallError", "AppClient",
    "DockerProvider", "DockerProviderError", "ServiceNotExposedError",
    "SchemaError", "SchemaValidator", "SchemaViolation",
]
