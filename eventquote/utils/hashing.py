import hashlib, json

def payload_hash(payload: dict) -> str:
    """sha256 of the key-sorted JSON form, so key order never changes the digest."""
    s = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(s.encode()).hexdigest()
