"""Path routing logic - maps inbound paths onto the upstream base URL."""


def extract_forwarded_path(path: str, marker: str) -> str:
    """Return everything after the first occurrence of marker, or ''."""
    _, found, remainder = path.partition(marker)
    return remainder if found else ""


def build_target_url(base_url: str, forwarded_path: str, query: str) -> str:
    """Join base URL, forwarded path and the raw query string verbatim."""
    search = f"?{query}" if query else ""
    return f"{base_url}/{forwarded_path}{search}"
