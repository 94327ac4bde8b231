"""gceme: a frontend/backend demo service for GCE load balancing."""

VERSION = "4.0.0"
