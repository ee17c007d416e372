"""Path <-> unit name escaping, same output as `systemd-escape --path`."""

import re
import string

_VALID = frozenset(string.ascii_letters + string.digits + ":_.")
_HEX_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")


def _escape_byte(b: int) -> str:
    return f"\\x{b:02x}"


def escape_systemd_path(path: str) -> str:
    """
    /dev/disk/by-label/my-disk -> dev-disk-by\\x2dlabel-my\\x2ddisk
    Redundant slashes are dropped; the root directory becomes "-".
    """
    parts = [p for p in path.split("/") if p]
    if not parts:
        return "-"
    trimmed = "/".join(parts)

    out = []
    for i, ch in enumerate(trimmed):
        if ch == "/":
            out.append("-")
        elif ch in _VALID and not (i == 0 and ch == "."):
            out.append(ch)
        else:
            out.extend(_escape_byte(b) for b in ch.encode("utf-8"))
    return "".join(out)


def unescape_systemd_path(name: str) -> str:
    """Inverse of escape_systemd_path (up to slash normalization)."""
    if name == "-":
        return "/"
    raw = bytearray()
    i = 0
    while i < len(name):
        m = _HEX_ESCAPE.match(name, i)
        if m:
            raw.append(int(m.group(1), 16))
            i = m.end()
            continue
        ch = name[i]
        raw.extend(b"/" if ch == "-" else ch.encode("utf-8"))
        i += 1
    return "/" + raw.decode("utf-8")


def unit_name(path: str, suffix: str) -> str:
    """Unit name for a path, e.g. unit_name("/data", "mount") -> "data.mount"."""
    return f"{escape_systemd_path(path)}.{suffix}"
