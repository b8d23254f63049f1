import json
import re
from pathlib import Path
from typing import Dict, Optional

EXPORT_NAME = "PLATFORM_ICONS"

# Double- or single-quoted JS string
_STR = r'"(?:[^"\\]|\\.)*"' + r"|'(?:[^'\\]|\\.)*'"
_ENTRY_RE = re.compile(
    rf"^\s*({_STR}|[A-Za-z_$][\w$]*)\s*:\s*({_STR}|null)\s*,?\s*(?://.*)?$"
)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)


def _unquote(token: str) -> str:
    """Decode a quoted JS string. Raises ValueError on a bad escape."""
    if token.startswith('"'):
        return json.loads(token)
    inner = token[1:-1].replace("\\'", "'").replace('"', '\\"')
    return json.loads(f'"{inner}"')


def render_icon_map(icon_map: Dict[str, Optional[str]]) -> str:
    """Render the icon map as a JS module, one entry per line in map order."""
    lines = []
    for platform, ext in icon_map.items():
        value = "null" if ext is None else json.dumps(ext)
        lines.append(f"   {json.dumps(platform)}: {value}")
    body = ",\n".join(lines)
    return f"export const {EXPORT_NAME} = {{\n{body}\n}}\n"


def save_icon_map(path: Path, icon_map: Dict[str, Optional[str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(render_icon_map(icon_map))


def parse_icon_map(content: str) -> Dict[str, Optional[str]]:
    """Parse an icon map JS module.

    Reads the layout render_icon_map writes as well as hand-edited or
    prettier-formatted files: single-quoted or bare keys, trailing line
    comments, and block comments. Unrecognized lines and entries with
    undecodable escapes are skipped.
    """
    icon_map: Dict[str, Optional[str]] = {}
    for line in _BLOCK_COMMENT_RE.sub("", content).splitlines():
        m = _ENTRY_RE.match(line)
        if not m:
            continue
        key, value = m.group(1), m.group(2)
        try:
            platform = _unquote(key) if key[0] in "\"'" else key
            icon_map[platform] = None if value == "null" else _unquote(value)
        except ValueError:
            continue
    return icon_map


def load_icon_map(path: Path) -> Dict[str, Optional[str]]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
    except IOError:
        return {}
    if not content:
        return {}
    return parse_icon_map(content)


def diff_icon_maps(
    old: Dict[str, Optional[str]], new: Dict[str, Optional[str]]
) -> Dict[str, Dict[str, Optional[str]]]:
    # Absent key and None both read as None; use membership to catch adds/removes
    changed = {}
    for k in list(old.keys()) + [k for k in new.keys() if k not in old]:
        if k not in old or k not in new or old[k] != new[k]:
            changed[k] = {"old": old.get(k), "new": new.get(k)}
    return changed
