from tabledoc.cli import main_cli


def test_documents_tables_from_arguments(sqlite_pipeline, monkeypatch, capsys):
    monkeypatch.setattr(main_cli, 'create_pipeline_from_env', lambda: sqlite_pipeline)

    assert main_cli.main(['orders', 'widgets']) == 0

    output = capsys.readouterr().out
    assert 'orders.html' in output
    assert 'widgets.html' in output


def test_failures_set_exit_code(sqlite_pipeline, monkeypatch, capsys):
    monkeypatch.setattr(main_cli, 'create_pipeline_from_env', lambda: sqlite_pipeline)

    assert main_cli.main(['orders', 'nope']) == 1
    assert 'nope' in capsys.readouterr().out


def test_interactive_until_exit(sqlite_pipeline, monkeypatch, capsys):
    answers = iter(['', 'widgets', 'exit'])
    monkeypatch.setattr(main_cli, 'create_pipeline_from_env', lambda: sqlite_pipeline)
    monkeypatch.setattr('builtins.input', lambda prompt='': next(answers))

    assert main_cli.main([]) == 0
    assert 'widgets.html' in capsys.readouterr().out


def test_missing_configuration(monkeypatch, capsys):
    def fail():
        raise ValueError("Missing configuration for mysql: password")

    monkeypatch.setattr(main_cli, 'create_pipeline_from_env', fail)

    assert main_cli.main(['orders']) == 2
    assert 'password' in capsys.readouterr().out
