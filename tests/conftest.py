# conftest.py
import json

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from gceme import backend, frontend
from gceme.metadata import MetadataError

BACKEND_URL = "http://backend.test/"

METADATA = {
    "instance_id": "4567890123",
    "zone": "us-central1-b",
    "instance_name": "gceme-backend-1",
    "hostname": "gceme-backend-1.c.demo-project.internal",
    "project_id": "demo-project",
    "internal_ip": "10.128.0.7",
    "external_ip": "35.192.0.12",
}


class FakeMetadata:
    """Metadata provider answering from a dict; `fail` names the lookup that errors."""

    def __init__(self, on_gce=True, fail=None, values=None):
        self._on_gce = on_gce
        self.fail = fail
        self.values = dict(values or METADATA)
        self.calls = []

    def on_gce(self):
        return self._on_gce

    def _lookup(self, name):
        self.calls.append(name)
        if name == self.fail:
            raise MetadataError(f"{name} lookup failed")
        return self.values[name]

    def instance_id(self):
        return self._lookup("instance_id")

    def zone(self):
        return self._lookup("zone")

    def instance_name(self):
        return self._lookup("instance_name")

    def hostname(self):
        return self._lookup("hostname")

    def project_id(self):
        return self._lookup("project_id")

    def internal_ip(self):
        return self._lookup("internal_ip")

    def external_ip(self):
        return self._lookup("external_ip")


class BrokenRaw:
    """Raw body whose stream dies halfway."""

    def stream(self, chunk_size, decode_content=True):
        from urllib3.exceptions import ProtocolError
        raise ProtocolError("Connection broken: IncompleteRead")

    def close(self):
        pass


class StubAdapter(BaseAdapter):
    """Transport adapter standing in for the backend service."""

    def __init__(self, body=b"", status=200, error=None, raw=None):
        super().__init__()
        self.body = body
        self.status = status
        self.error = error
        self.raw = raw
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        if self.error is not None:
            raise self.error
        resp = requests.Response()
        resp.status_code = self.status
        resp.headers = CaseInsensitiveDict({"Content-Type": "application/json"})
        resp.url = request.url
        resp.request = request
        if self.raw is not None:
            resp.raw = self.raw
        else:
            resp._content = self.body
            resp._content_consumed = True
        return resp

    def close(self):
        pass


def backend_payload(**fields):
    doc = {"Id": "", "Name": "", "Hostname": "", "Zone": "", "Project": "",
           "InternalIP": "", "ExternalIP": "", "LBRequest": "", "ClientIP": "", "Error": ""}
    doc.update(fields)
    return json.dumps(doc).encode()


@pytest.fixture
def fake_metadata():
    return FakeMetadata()


@pytest.fixture
def backend_client(fake_metadata):
    app = backend.create_app(fake_metadata)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def frontend_client_for():
    """Build a frontend test client whose backend is the given StubAdapter."""
    def make(adapter):
        session = requests.Session()
        session.mount(BACKEND_URL, adapter)
        app = frontend.create_app(BACKEND_URL, session=session)
        app.config["TESTING"] = True
        return app.test_client()
    return make
