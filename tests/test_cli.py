import json

import pytest

from schema_guard.cli.run_validate import main

SCHEMA = {
    "type": "object",
    "required": ["a"],
    "properties": {
        "a": {"type": "number", "default": 5},
        "tags": {"type": "array", "items": {"type": "string"}, "minItems": 2},
    },
    "additionalProperties": False,
}


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(SCHEMA), encoding="utf-8")
    return path


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main([str(arg) for arg in argv])
    return excinfo.value.code


def test_valid_document(tmp_path, schema_file, capsys) -> None:
    data = _write(tmp_path, "data.yaml", "a: 1\ntags: [x, y]\n")
    assert _run(["--schema", schema_file, data]) == 0
    assert "Validation succeeded with no errors." in capsys.readouterr().out


def test_invalid_document_reports_location(tmp_path, schema_file, capsys) -> None:
    data = _write(tmp_path, "data.json", '{"a": "one"}')
    assert _run(["--schema", schema_file, data]) == 1
    out = capsys.readouterr().out
    assert str(data) in out
    assert (
        "invalid data for value 'data.a', validated against 'schema.properties.a': "
        "Value type string does not match schema type number"
    ) in out


def test_json_format(tmp_path, schema_file, capsys) -> None:
    good = _write(tmp_path, "good.json", '{"a": 1}')
    bad = _write(tmp_path, "bad.json", '{"a": 1, "tags": [1, "x"]}')
    assert _run(["--schema", schema_file, "--format", "json", good, bad]) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["files"] == 2
    assert set(output) == {"files", "errors", "results"}
    assert output["errors"] == 1
    good_result, bad_result = output["results"]
    assert good_result["errors"] == []
    assert set(good_result) == {"file", "errors"}
    assert bad_result["errors"] == [
        {
            "message": "Value type number does not match schema type string",
            "value_path": "data.tags[0]",
            "schema_path": "schema.properties.tags.items",
            "pointer": "/tags/0",
        }
    ]


def test_github_actions_format(tmp_path, schema_file, capsys) -> None:
    bad = _write(tmp_path, "bad.json", '{"b": 1}')
    assert _run(["--schema", schema_file, "--format", "github-actions", bad]) == 1
    assert capsys.readouterr().out.strip() == f"::error file={bad}::Missing property a at data"


def test_missing_data_file_is_reported(tmp_path, schema_file, capsys) -> None:
    assert _run(["--schema", schema_file, tmp_path / "missing.json"]) == 1
    assert "Document not found" in capsys.readouterr().out


def test_missing_schema_file(tmp_path, capsys) -> None:
    data = _write(tmp_path, "data.json", "{}")
    assert _run(["--schema", tmp_path / "missing.json", data]) == 1
    assert "Document not found" in capsys.readouterr().err


def test_schema_must_be_a_mapping(tmp_path, capsys) -> None:
    schema = _write(tmp_path, "schema.json", "[1, 2]")
    data = _write(tmp_path, "data.json", "{}")
    assert _run(["--schema", schema, data]) == 1
    assert "must be a mapping" in capsys.readouterr().err


def test_check_schema(tmp_path, capsys) -> None:
    schema = _write(tmp_path, "schema.json", '{"type": "decimal"}')
    data = _write(tmp_path, "data.json", "{}")
    assert _run(["--schema", schema, "--check-schema", data]) == 1
    assert "(pointer=/type)" in capsys.readouterr().out


def test_check_schema_passes_well_formed_schema(tmp_path, schema_file, capsys) -> None:
    data = _write(tmp_path, "data.json", '{"a": 2}')
    assert _run(["--schema", schema_file, "--check-schema", data]) == 0


def test_normalize_single_file(tmp_path, schema_file, capsys) -> None:
    data = _write(tmp_path, "data.json", '{"a": "x", "tags": ["t"], "junk": true}')
    assert _run(["--schema", schema_file, "--normalize", data]) == 0
    assert json.loads(capsys.readouterr().out) == {"a": 5, "tags": ["t", ""]}


def test_normalize_many_files(tmp_path, schema_file, capsys) -> None:
    first = _write(tmp_path, "first.json", "{}")
    second = _write(tmp_path, "second.yaml", "a: 3\n")
    assert _run(["--schema", schema_file, "--normalize", first, second]) == 0
    assert json.loads(capsys.readouterr().out) == {str(first): {"a": 5}, str(second): {"a": 3}}


def test_normalize_missing_file(tmp_path, schema_file, capsys) -> None:
    assert _run(["--schema", schema_file, "--normalize", tmp_path / "missing.json"]) == 1
    assert "Document not found" in capsys.readouterr().err


def test_normalize_prints_yaml_timestamps_as_text(tmp_path, capsys) -> None:
    schema = _write(tmp_path, "schema.json", '{"type": "object", "required": ["when"]}')
    data = _write(tmp_path, "data.yaml", "when: 2024-01-02\nstamp: 2024-01-02T03:04:05Z\n")
    assert _run(["--schema", schema, "--normalize", data]) == 0
    captured = capsys.readouterr()
    assert "Traceback" not in captured.err
    output = json.loads(captured.out)
    assert output["when"] == "2024-01-02"
    assert output["stamp"].startswith("2024-01-02 03:04:05")
