import requests
from google.auth import exceptions
from google.auth.compute_engine import _metadata
from google.auth.transport.requests import Request


class MetadataError(Exception):
    """A single metadata lookup failed."""


# ------------------------- GCE METADATA -------------------------
class GCEMetadata:
    """
    Instance facts from the GCE metadata server.
    Every lookup returns a string or raises MetadataError.
    """

    def __init__(self, session=None):
        self._request = Request(session or requests.Session())
        self._on_gce = None

    def on_gce(self):
        """Ping the metadata server once and remember the answer."""
        if self._on_gce is None:
            self._on_gce = _metadata.ping(self._request)
        return self._on_gce

    def _get(self, path):
        try:
            return str(_metadata.get(self._request, path))
        except exceptions.TransportError as e:
            raise MetadataError(f'metadata: GCE metadata "{path}" not available: {e}') from e

    def instance_id(self):
        return self._get("instance/id")

    def zone(self):
        # projects/<number>/zones/<zone>
        return self._get("instance/zone").rsplit("/", 1)[-1]

    def instance_name(self):
        return self._get("instance/name")

    def hostname(self):
        return self._get("instance/hostname")

    def project_id(self):
        return self._get("project/project-id")

    def internal_ip(self):
        return self._get("instance/network-interfaces/0/ip")

    def external_ip(self):
        return self._get("instance/network-interfaces/0/access-configs/0/external-ip")
