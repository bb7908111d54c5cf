"""Tests for the administration CLI."""

import pytest

from src.cli.admin_cli import build_parser, main


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"


def test_create_user_and_list_coverages(database_url, capsys) -> None:
    assert main(["--database", database_url, "init-db"]) == 0
    assert main([
        "--database", database_url,
        "create-user", "jdupont", "Jeanne Dupont", "long-password",
    ]) == 0

    output = capsys.readouterr().out
    assert "Database tables created" in output
    assert "Created editor 'jdupont'" in output

    assert main(["--database", database_url, "list-coverages", "--active"]) == 0
    assert "No live coverages" in capsys.readouterr().out


def test_create_user_rejects_duplicates(database_url, capsys) -> None:
    main(["--database", database_url, "init-db"])
    main(["--database", database_url, "create-user", "admin", "Admin", "long-password", "admin"])

    code = main(["--database", database_url, "create-user", "admin", "Admin", "other-password"])

    assert code == 1
    assert "already exists" in capsys.readouterr().out


def test_create_user_rejects_unknown_role(database_url, capsys) -> None:
    code = main([
        "--database", database_url, "create-user", "bob", "Bob", "long-password", "superuser",
    ])

    assert code == 1
    assert "Unknown role 'superuser'" in capsys.readouterr().out


def test_create_user_rejects_overlong_password(database_url, capsys) -> None:
    code = main(["--database", database_url, "create-user", "bob", "Bob", "x" * 80])

    assert code == 1
    assert "Invalid password" in capsys.readouterr().out


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
