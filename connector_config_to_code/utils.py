"""
Naming and literal helpers shared by the modeler and the Go backend.
"""

# Segments rendered fully upper-case in Go identifiers
ACRONYMS = {"ID", "SSH", "SSL", "DB", "URL", "API", "AWS", "ARN"}

# Backend suffixes that mark user-facing variants of a field
_USER_SUFFIXES = (".user.defined", ".user.displayed")


def capitalize_first(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched ("ABC" stays "ABC")."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def lowercase_first(text: str) -> str:
    """Lower-case the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].lower() + text[1:]


def to_pascal_case(text: str) -> str:
    """Convert a snake_case (or kebab-case) identifier to a Go exported name.

    Examples:
        "database_hostname" -> "DatabaseHostname"
        "ssl_mode" -> "SSLMode"
        "id" -> "ID"
        "sql-server" -> "SqlServer"

    Args:
        text: The identifier to convert

    Returns:
        PascalCase identifier with known acronyms upper-cased
    """
    parts = text.replace("-", "_").split("_")
    words = []
    for part in parts:
        if not part:
            continue
        upper = part.upper()
        words.append(upper if upper in ACRONYMS else capitalize_first(part))
    return "".join(words)


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def camel_to_snake(text: str) -> str:
    """Split embedded camelCase / PascalCase runs with underscores.

    An underscore goes before an upper-case letter that follows a lower-case letter or digit,
    and before the last letter of an upper-case run that is followed by a lower-case letter,
    so "SSLMode" becomes "SSL_Mode" rather than "S_S_L_Mode". Case is preserved.
    """
    out = []
    for i, char in enumerate(text):
        if _is_upper(char) and i > 0:
            prev = text[i - 1]
            if prev != "_" and not _is_upper(prev):
                out.append("_")
            elif _is_upper(prev) and i + 1 < len(text) and _is_lower(text[i + 1]):
                out.append("_")
        out.append(char)
    return "".join(out)


def attribute_name(backend_name: str) -> str:
    """Normalize a dotted backend field name to a Terraform attribute name.

    Examples:
        "database.hostname.user.defined" -> "database_hostname"
        "ssh.public.key.user.displayed" -> "ssh_public_key"
        "snapshot.SSLMode" -> "snapshot_ssl_mode"
    """
    name = backend_name
    for suffix in _USER_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    name = name.replace(".", "_").replace("-", "_")
    return camel_to_snake(name).lower()


def go_quote(text: str) -> str:
    """Render text as a Go interpreted string literal."""
    out = ['"']
    for char in text:
        if char == "\\":
            out.append("\\\\")
        elif char == '"':
            out.append('\\"')
        elif char == "\n":
            out.append("\\n")
        elif char == "\t":
            out.append("\\t")
        elif char == "\r":
            out.append("\\r")
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\x{ord(char):02x}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)
