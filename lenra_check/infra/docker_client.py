# -----------------------------------------------------------------------------
# DOCKER PROVIDER - SERVICE PREFLIGHT
# -----------------------------------------------------------------------------
# Responsibility: Look up the docker compose services of the app to tell
# whether the app service is running and publishes a port, before any check
# calls it. Read-only: containers are never started or stopped here.
# -----------------------------------------------------------------------------

import docker
from docker import DockerClient
from docker.errors import DockerException
from rich.console import Console
from rich.panel import Panel

console = Console()

APP_SERVICE_NAME = "app"
COMPOSE_SERVICE_LABEL = "com.docker.compose.service"
COMPOSE_PROJECT_LABEL = "com.docker.compose.project"


class DockerProviderError(Exception):
    """Raised when the Docker engine cannot be reached."""

    pass


class ServiceNotExposedError(Exception):
    """Raised when a compose service has no running container publishing a port."""

    def __init__(self, service: str) -> None:
        super().__init__(f"The '{service}' service is not exposed, start the app first")
        self.service = service


class DockerProvider:
    """
    Docker SDK wrapper answering questions about the compose services.

    Args:
        client: An existing DockerClient. Connects from the environment if None.
    """

    def __init__(self, client: DockerClient | None = None) -> None:
        self._client = client if client is not None else self._connect()

    @staticmethod
    def _connect() -> DockerClient:
        """
        Connect to the Docker daemon configured in the environment.

        Raises:
            DockerProviderError: If the daemon does not answer.
        """
        try:
            client = docker.from_env()
            client.ping()
            return client
        except DockerException as e:
            console.print(
                Panel(
                    "[bold red]Docker Engine Unavailable[/bold red]\n\n"
                    "1. Start Docker\n"
                    "2. Start the app with its docker compose file\n"
                    "3. Run the check again",
                    title="PREFLIGHT",
                    border_style="red",
                )
            )
            raise DockerProviderError(f"Docker Engine is not available: {e}") from e

    def get_service_published_ports(self, service: str, project: str | None = None) -> list[int]:
        """
        List the host ports published by the running containers of a service.

        Args:
            service: The compose service name.
            project: The compose project name. Any project if None.

        Returns:
            Sorted unique host ports. Empty if the service is not exposed.
        """
        labels = [f"{COMPOSE_SERVICE_LABEL}={service}"]
        if project:
            labels.append(f"{COMPOSE_PROJECT_LABEL}={project}")

        try:
            containers = self._client.containers.list(filters={"label": labels, "status": "running"})
        except DockerException as e:
            raise DockerProviderError(f"Could not list the '{service}' containers: {e}") from e

        ports: set[int] = set()
        for container in containers:
            for bindings in (container.ports or {}).values():
                for binding in bindings or []:
                    host_port = binding.get("HostPort")
                    if host_port:
                        ports.add(int(host_port))
        return sorted(ports)

    def ensure_service_exposed(self, service: str = APP_SERVICE_NAME, project: str | None = None) -> list[int]:
        """
        Check that a service publishes at least one port.

        Raises:
            ServiceNotExposedError: If it publishes none.
        """
        ports = self.get_service_published_ports(service, project)
        if not ports:
            console.print(f"[red][DOCKER] Service '{service}' is not exposed[/red]")
            raise ServiceNotExposedError(service)
        console.print(f"[green][DOCKER] Service '{service}' exposed on {ports}[/green]")
        return ports
