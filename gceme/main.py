import argparse
import os

from gceme import VERSION, backend, frontend


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="GCE frontend/backend demo server")
    parser.add_argument("-version", "--version", action="store_true", help="display version")
    parser.add_argument("-frontend", "--frontend", action="store_true", help="run in frontend mode")
    parser.add_argument("-port", "--port", type=int, default=int(os.environ.get("PORT", 8080)),
                        help="port to bind")
    parser.add_argument("-backend-service", "--backend-service", default="http://127.0.0.1:8081",
                        help="hostname of backend server")
    return parser.parse_args(argv)


def build_app(args):
    """Pick the role and build its Flask app."""
    if args.frontend:
        print("Operating in frontend mode...")
        return frontend.create_app(args.backend_service)
    print("Operating in backend mode...")
    return backend.create_app()


# ------------------------- CLI -------------------------
def main(argv=None):
    args = parse_args(argv)

    if args.version:
        print(f"Version {VERSION}")
        return

    app = build_app(args)
    print(f"Listening on :{args.port}")
    app.run(host="0.0.0.0", port=args.port, threaded=True)


if __name__ == "__main__":
    main()
