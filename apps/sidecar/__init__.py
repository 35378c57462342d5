"""Mock device sidecar speaking line-delimited JSON over STDIO."""

from apps.sidecar.cli import main
from apps.sidecar.models import RequestEnvelope, ResponseEnvelope
from apps.sidecar.server import SidecarStdioServer

__all__ = ["main", "RequestEnvelope", "ResponseEnvelope", "SidecarStdioServer"]
