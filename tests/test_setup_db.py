from taskboard.cmd.setup_db import (
    DEFAULT_CORS_ORIGIN,
    backend_env,
    main,
    read_env_file,
    remove_sqlite_file,
    update_env_file,
)


def test_update_env_file_keeps_unrelated_lines(tmp_path):
    env = tmp_path / ".env"
    env.write_text("# local settings\nLOG_LEVEL=DEBUG\nDATABASE_URL=old\n\n\nAPI_PORT=8080\n")

    update_env_file(
        env,
        {"DATABASE_URL": "new", "STORAGE_BACKEND": "sql"},
        defaults={"API_PORT": "4000", "CORS_ORIGIN": DEFAULT_CORS_ORIGIN},
    )

    lines = env.read_text().splitlines()
    assert lines[0] == "# local settings"
    assert "LOG_LEVEL=DEBUG" in lines
    assert "DATABASE_URL=new" in lines
    assert "API_PORT=8080" in lines
    assert f"CORS_ORIGIN={DEFAULT_CORS_ORIGIN}" in lines
    assert "STORAGE_BACKEND=sql" in lines


def test_update_env_file_fills_empty_defaults(tmp_path):
    env = tmp_path / ".env"
    env.write_text("CORS_ORIGIN=\n")

    update_env_file(env, {}, defaults={"CORS_ORIGIN": "http://x.test"})

    assert read_env_file(env)["CORS_ORIGIN"] == "http://x.test"


def test_update_env_file_creates_missing_file(tmp_path):
    env = tmp_path / ".env"

    update_env_file(env, {"STORAGE_BACKEND": "mongo"})

    assert env.read_text() == "STORAGE_BACKEND=mongo\n"


def test_backend_env_keeps_existing_urls():
    assert backend_env("sqlite", {"DATABASE_URL": "sqlite+aiosqlite:///x.db"}) == {
        "STORAGE_BACKEND": "sql",
        "DATABASE_URL": "sqlite+aiosqlite:///x.db",
    }
    assert backend_env("mongodb")["STORAGE_BACKEND"] == "mongo"


def test_remove_sqlite_file(tmp_path):
    db_file = tmp_path / "tasks.db"
    db_file.write_bytes(b"")
    url = f"sqlite+aiosqlite:///{db_file}"

    assert remove_sqlite_file(url) is True
    assert not db_file.exists()
    assert remove_sqlite_file(url) is False


def test_main_sets_up_sqlite(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    db_file = tmp_path / "data" / "tasks.db"
    env = tmp_path / ".env"
    env.write_text(f"DATABASE_URL=sqlite+aiosqlite:///{db_file}\n")

    assert main(["--db=sqlite", "--env-file", str(env)]) == 0

    values = read_env_file(env)
    assert values["STORAGE_BACKEND"] == "sql"
    assert values["API_PORT"] == "4000"
    assert db_file.exists()


def test_read_env_file_unquotes_values(tmp_path):
    env = tmp_path / ".env"
    env.write_text("# comment\nDATABASE_URL=\"sqlite+aiosqlite:///x.db\"\nCORS_ORIGIN=''\n")

    assert read_env_file(env) == {
        "DATABASE_URL": "sqlite+aiosqlite:///x.db",
        "CORS_ORIGIN": "",
    }


def test_main_rejects_unknown_backend(tmp_path):
    env = tmp_path / ".env"
    env.write_text("LOG_LEVEL=DEBUG\n")

    assert main(["--db=postgres", "--env-file", str(env)]) == 1
    assert env.read_text() == "LOG_LEVEL=DEBUG\n"


def test_main_clean_removes_quoted_sqlite_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    db_file = tmp_path / "tasks.db"
    db_file.write_bytes(b"not a sqlite database")
    env = tmp_path / ".env"
    env.write_text(f'DATABASE_URL="sqlite+aiosqlite:///{db_file}"\n')

    assert main(["--db=sqlite", "--clean", "--env-file", str(env)]) == 0

    assert read_env_file(env)["DATABASE_URL"] == f"sqlite+aiosqlite:///{db_file}"
    assert db_file.read_bytes() != b"not a sqlite database"
