"""
CSV and JSON serialization of explorer rows for download
"""
import json
from typing import Any, Dict, List


def _csv_cell(value: Any) -> str:
    if value is None:
        text = ''
    elif isinstance(value, (dict, list)):
        text = json.dumps(value, separators=(',', ':'))
    elif isinstance(value, bool):
        text = 'true' if value else 'false'
    else:
        text = str(value)
    if ',' in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def rows_to_csv(rows: List[Dict[str, Any]]) -> str:
    """
    Serialize flat rows as CSV

    The header comes from the first row's keys. Values containing a comma or a
    double quote are quoted with internal quotes doubled; dict and list values
    are JSON-encoded first. An empty row list yields an empty string.
    """
    if not rows:
        return ''
    headers = list(rows[0].keys())
    lines = [','.join(headers)]
    for row in rows:
        lines.append(','.join(_csv_cell(row.get(h)) for h in headers))
    return '\n'.join(lines)


def rows_to_json(rows: Any) -> str:
    """Pretty-printed JSON"""
    return json.dumps(rows, indent=2, ensure_ascii=False)
