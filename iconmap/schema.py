from typing import Any, List, Sequence

FORBIDDEN_CHARS = "/?#"


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def validate_platforms(platforms: Sequence[Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Each ID ends up in a URL path, so it must be a single clean segment.
    """
    errors: List[str] = []
    seen = set()

    for i, p in enumerate(platforms):
        if not _is_non_empty_str(p):
            errors.append(f"Entry {i} must be a non-empty string")
            continue
        if any(c.isspace() for c in p):
            errors.append(f"Platform '{p}' must not contain whitespace")
        if any(c in p for c in FORBIDDEN_CHARS):
            errors.append(f"Platform '{p}' must not contain any of '{FORBIDDEN_CHARS}'")
        if p in seen:
            errors.append(f"Duplicate platform: {p}")
        seen.add(p)

    return errors
