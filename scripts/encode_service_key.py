"""Prints the FIREBASE_SERVICE_KEY value for a service-account JSON file."""

from pathlib import Path
import json
import sys

from deals_server.auth.credentials import decode_service_key, encode_service_key


def main(path: str) -> None:
    info = json.loads(Path(path).read_text())
    blob = encode_service_key(info)
    decode_service_key(blob)
    print(blob)


if __name__ == "__main__":
    main(sys.argv[1])
