import json
from pathlib import Path

import pytest

from runnerstrack.config import Config, init_config

YAML_TEXT = """\
database:
  connection_string: "host=localhost dbname=runners_db"
  max_idle_connections: 5
  max_open_connections: 20
  driver_name: postgres
http:
  server_address: ":8080"
  debug: true
"""


def test_reads_yaml_nested_keys(tmp_path):
    (tmp_path / "runners.yaml").write_text(YAML_TEXT)
    config = init_config("runners", [str(tmp_path)])
    assert config.get_string("database.driver_name") == "postgres"
    assert config.get_string("http.server_address") == ":8080"
    assert config.path == tmp_path / "runners.yaml"


def test_non_string_values_become_strings(tmp_path):
    (tmp_path / "runners.yml").write_text(YAML_TEXT)
    config = init_config("runners", [str(tmp_path)])
    assert config.get_string("database.max_open_connections") == "20"
    assert config.get_string("http.debug") == "true"


def test_missing_key_gives_empty_string(tmp_path):
    (tmp_path / "runners.yaml").write_text(YAML_TEXT)
    config = init_config("runners", [str(tmp_path)])
    assert config.get_string("database.conecction_max_lifetime") == ""
    assert config.get_string("database.driver_name.extra") == ""
    assert config.get_string("database") == ""


def test_keys_are_case_insensitive():
    config = Config({"HTTP": {"Server_Address": ":9000"}})
    assert config.get_string("http.server_address") == ":9000"
    assert config.get_string("HTTP.SERVER_ADDRESS") == ":9000"


def test_reads_json_and_toml(tmp_path):
    json_dir = tmp_path / "j"
    toml_dir = tmp_path / "t"
    json_dir.mkdir()
    toml_dir.mkdir()
    (json_dir / "app.json").write_text(json.dumps({"http": {"server_address": ":1"}}))
    (toml_dir / "app.toml").write_text('[http]\nserver_address = ":2"\n')
    assert init_config("app", [str(json_dir)]).get_string("http.server_address") == ":1"
    assert init_config("app", [str(toml_dir)]).get_string("http.server_address") == ":2"


def test_first_search_path_wins(tmp_path):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    (first / "runners.yaml").write_text("name: first\n")
    (second / "runners.yaml").write_text("name: second\n")
    config = init_config("runners", [str(first), str(second)])
    assert config.get_string("name") == "first"


def test_falls_through_to_later_path(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    (tmp_path / "runners.yaml").write_text("name: found\n")
    config = init_config("runners", [str(empty), str(tmp_path)])
    assert config.get_string("name") == "found"


def test_home_path_is_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "runners.yaml").write_text("name: home\n")
    config = init_config("runners", ["$HOME"])
    assert config.get_string("name") == "home"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        init_config("runners", [str(tmp_path)])


def test_invalid_file_raises(tmp_path):
    (tmp_path / "runners.json").write_text("{not json")
    with pytest.raises(ValueError):
        init_config("runners", [str(tmp_path)])


def test_non_mapping_file_raises(tmp_path):
    (tmp_path / "runners.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        init_config("runners", [str(Path(tmp_path))])