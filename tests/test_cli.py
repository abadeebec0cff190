from __future__ import annotations

import pytest

from configstore import __main__ as cli
from configstore.security import verify_password


def test_hash_password_prints_verifiable_hash(monkeypatch, capsys):
    monkeypatch.setattr(cli.getpass, 'getpass', lambda prompt='': 's3cret-pass')

    cli.main(['hash-password'])

    hashed = capsys.readouterr().out.strip()
    assert verify_password('s3cret-pass', hashed)
    assert not verify_password('wrong', hashed)


def test_hash_password_rejects_mismatched_repeat(monkeypatch, capsys):
    answers = iter(['first', 'second'])
    monkeypatch.setattr(cli.getpass, 'getpass', lambda prompt='': next(answers))

    with pytest.raises(SystemExit) as exc:
        cli.main(['hash-password'])

    assert exc.value.code == 1
    assert capsys.readouterr().out == ''


def test_default_command_runs_server(monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, 'run', lambda app, **kwargs: calls.append((app, kwargs)))

    cli.main([])

    assert calls[0][0] == 'configstore.main:app'
    assert calls[0][1]['port'] == cli.settings.app_port
