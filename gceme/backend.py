from flask import Flask, jsonify, request
from werkzeug.exceptions import MethodNotAllowed

from gceme import VERSION
from gceme.instance import new_instance
from gceme.metadata import GCEMetadata

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
TEXT = {"Content-Type": "text/plain; charset=utf-8"}

# Hop-by-hop headers left out of the dump
_SKIP_HEADERS = {"host", "transfer-encoding", "trailer"}


def dump_request(req):
    """
    Render the request the way it came off the wire:
    request line, Host, remaining headers, blank line, body.
    """
    uri = req.environ.get("RAW_URI") or req.environ.get("REQUEST_URI")
    if not uri:
        uri = req.path
        if req.query_string:
            uri += "?" + req.query_string.decode("latin-1")
    proto = req.environ.get("SERVER_PROTOCOL", "HTTP/1.1")

    lines = [f"{req.method} {uri} {proto}", f"Host: {req.host}"]
    for name, value in req.headers.items():
        if name.lower() not in _SKIP_HEADERS:
            lines.append(f"{name}: {value}")
    body = req.get_data().decode("utf-8", errors="replace")
    return "\r\n".join(lines) + "\r\n\r\n" + body


def accept_any_method(app):
    """Route methods outside ALL_METHODS to the view the path matches."""
    @app.errorhandler(MethodNotAllowed)
    def dispatch(e):
        endpoint, args = app.url_map.bind_to_environ(request.environ).match(method="GET")
        return app.view_functions[endpoint](**args)


def create_app(provider=None):
    """Backend role: report this instance and the request that reached it."""
    provider = provider or GCEMetadata()
    app = Flask(__name__)

    @app.route("/", methods=ALL_METHODS)
    @app.route("/<path:path>", methods=ALL_METHODS)
    def index(path=None):
        instance = new_instance(provider).with_request(dump_request(request))
        return jsonify(instance.to_dict())

    @app.route("/healthz", methods=ALL_METHODS)
    def healthz():
        return "", 200

    @app.route("/version", methods=ALL_METHODS)
    def version():
        return f"{VERSION}\n", 200, TEXT

    accept_any_method(app)
    return app
