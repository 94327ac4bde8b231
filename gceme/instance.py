from dataclasses import dataclass, fields, replace

from gceme.metadata import MetadataError

NOT_ON_GCE = "Not running on GCE"

# Python attribute -> JSON field name
WIRE_NAMES = {
    "id": "Id",
    "name": "Name",
    "hostname": "Hostname",
    "zone": "Zone",
    "project": "Project",
    "internal_ip": "InternalIP",
    "external_ip": "ExternalIP",
    "lb_request": "LBRequest",
    "client_ip": "ClientIP",
    "error": "Error",
}


@dataclass(frozen=True)
class Instance:
    id: str = ""
    name: str = ""
    hostname: str = ""
    zone: str = ""
    project: str = ""
    internal_ip: str = ""
    external_ip: str = ""
    lb_request: str = ""
    client_ip: str = ""
    error: str = ""

    def to_dict(self):
        return {WIRE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data):
        """
        Rebuild an Instance from its JSON document.
        Unknown keys are ignored; missing and null keys stay empty.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        values = {}
        for attr, key in WIRE_NAMES.items():
            value = data.get(key)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ValueError(f"field {key} must be a string, got {type(value).__name__}")
            values[attr] = value
        return cls(**values)

    def with_request(self, dump):
        return replace(self, lb_request=dump)


def collect(lookups):
    """
    Run (field, lookup) pairs in order and stop at the first MetadataError.
    Returns (values collected so far, error or None).
    """
    values = {}
    for field, lookup in lookups:
        try:
            values[field] = lookup()
        except MetadataError as e:
            return values, e
    return values, None


def new_instance(provider):
    """Build a snapshot of this instance from the metadata provider."""
    if not provider.on_gce():
        return Instance(error=NOT_ON_GCE)

    values, err = collect([
        ("id", provider.instance_id),
        ("zone", provider.zone),
        ("name", provider.instance_name),
        ("hostname", provider.hostname),
        ("project", provider.project_id),
        ("internal_ip", provider.internal_ip),
        ("external_ip", provider.external_ip),
    ])
    return Instance(error=str(err) if err else "", **values)
