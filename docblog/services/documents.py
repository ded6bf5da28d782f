import re
from collections.abc import Iterable
from urllib.parse import urlparse

DOCUMENT_ID_PATTERN = re.compile(r"[-\w]{25,}")


def is_valid_document_link(url: str, allowed_hosts: Iterable[str] = ()) -> bool:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        return False
    hosts = {host.lower() for host in allowed_hosts}
    return not hosts or parsed.hostname.lower() in hosts


def extract_document_id(url: str) -> str | None:
    # Drive/Docs ids are long url-safe tokens; the first such run in the link is the id.
    match = DOCUMENT_ID_PATTERN.search(url)
    return match.group(0) if match else None
