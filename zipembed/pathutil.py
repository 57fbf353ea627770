from __future__ import annotations


def norm_path(p: str) -> str:
    """Normalize archive paths to a canonical forward-slash form.

    Rules:
    - Convert backslashes to slashes
    - Strip leading/trailing slashes
    - Remove empty and '.' segments
    - Reject '..' segments
    """
    p = p.replace("\\", "/").strip("/")
    parts = [q for q in p.split("/") if q not in ("", ".")]
    for q in parts:
        if q == "..":
            raise ValueError(f"Archive name may not contain '..': {p}")
    return "/".join(parts)


def join_name(prefix: str, name: str) -> str:
    if not prefix:
        return name
    return prefix + "/" + name


def dir_name(name: str) -> str:
    """Return the directory-entry form of an archive name (trailing slash)."""
    name = norm_path(name)
    if not name:
        raise ValueError("Directory entry name may not be empty")
    return name + "/"
