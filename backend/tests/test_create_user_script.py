import pytest

from helpdesk.scripts import create_user as script
from helpdesk.services.users import get_user_by_email


@pytest.fixture
def script_engine(engine, monkeypatch):
    monkeypatch.setattr(script, "engine", engine)
    monkeypatch.setattr(script, "init_db", lambda: None)
    return engine


def test_creates_administrator(script_engine, session, capsys):
    code = script.main(
        ["--name", "Ada", "--email", "Ada@Example.com", "--role", "Administrator", "--password", "s3cret-pass"]
    )

    assert code == 0
    assert "Created user ada@example.com (Administrator)" in capsys.readouterr().out
    user = get_user_by_email(session, "ada@example.com")
    assert user is not None
    assert user.role == "Administrator"


def test_prompts_for_password(script_engine, session, monkeypatch):
    monkeypatch.setattr(script.getpass, "getpass", lambda prompt: "prompted-pass")

    assert script.main(["--name", "Bob", "--email", "bob@example.com"]) == 0
    assert get_user_by_email(session, "bob@example.com").role == "Operator"


def test_duplicate_email_fails(script_engine, capsys):
    argv = ["--name", "Ada", "--email", "ada@example.com", "--password", "s3cret-pass"]

    assert script.main(argv) == 0
    assert script.main(argv) == 1
    assert "already exists" in capsys.readouterr().err


def test_rejects_unknown_role(script_engine):
    with pytest.raises(SystemExit):
        script.main(["--name", "X", "--email", "x@example.com", "--role", "Root", "--password", "pw"])
