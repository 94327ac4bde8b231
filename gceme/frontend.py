import contextlib

import requests
from flask import Flask

from gceme import VERSION
from gceme.backend import ALL_METHODS, TEXT, accept_any_method
from gceme.instance import Instance


def create_app(backend_url, session=None):
    """
    Frontend role: fetch the backend's report and render it as HTML.

    The session, the outbound GET and the template are built here once and
    shared read-only by every request thread.
    """
    session = session or requests.Session()
    backend_req = session.prepare_request(requests.Request("GET", backend_url))

    app = Flask(__name__)
    template = app.jinja_env.get_template("index.html")

    @app.route("/", methods=ALL_METHODS)
    @app.route("/<path:path>", methods=ALL_METHODS)
    def index(path=None):
        try:
            resp = session.send(backend_req, stream=True)
        except requests.RequestException as e:
            return f"Error: {e}\n", 503, TEXT

        with resp:
            try:
                resp.content
            except requests.RequestException as e:
                return f"Error: {e}\n", 500, TEXT
            try:
                instance = Instance.from_dict(resp.json())
            except ValueError as e:
                return f"Error: {e}\n", 500, TEXT

        return template.render(instance=instance), 200

    @app.route("/healthz", methods=ALL_METHODS)
    def healthz():
        # reachability only, the payload is read and dropped
        try:
            resp = session.send(backend_req, stream=True)
        except requests.RequestException as e:
            return f"Backend could not be connected to: {e}", 503, TEXT
        with resp, contextlib.suppress(requests.RequestException):
            resp.content
        return "", 200

    @app.route("/version", methods=ALL_METHODS)
    def version():
        return f"{VERSION}\n", 200, TEXT

    accept_any_method(app)
    return app
