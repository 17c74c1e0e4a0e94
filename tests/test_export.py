"""Tests for CSV and JSON export."""

import json

from dashboard.export import rows_to_csv, rows_to_json
from dashboard.queries import flatten_rows


def test_values_with_commas_are_quoted():
    assert rows_to_csv([{"a": "x,y", "b": 3}]) == 'a,b\n"x,y",3'


def test_internal_quotes_are_doubled():
    assert rows_to_csv([{"name": 'say "hi"'}]) == 'name\n"say ""hi"""'


def test_nested_values_are_json_encoded():
    csv_text = rows_to_csv([{"tags": ["chore", "deps"], "meta": None, "flag": True}])
    assert csv_text.split("\n")[1] == '"[""chore"",""deps""]",,true'


def test_header_from_first_row():
    csv_text = rows_to_csv([{"a": 1, "b": 2}, {"b": 4, "a": 3, "c": 9}])
    assert csv_text == "a,b\n1,2\n3,4"


def test_empty_rows():
    assert rows_to_csv([]) == ""
    assert json.loads(rows_to_json([])) == []


def test_explorer_rows(app_data):
    rows = flatten_rows(app_data)
    lines = rows_to_csv(rows).split("\n")
    assert lines[0] == ("pluginName,migrationCount,successCount,failCount,"
                        "latestMigration,prsMerged,prsOpen,latestRecipe")
    assert lines[1] == "git,2,2,0,2026-01-20,1,1,Setup Jenkinsfile"
    assert len(lines) == 4
    assert json.loads(rows_to_json(rows)) == rows
