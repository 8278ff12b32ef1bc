from todoweb.app import main


def test_prints_next_date(capsys):
    assert main(["20240101", "d 7", "--now", "20240101"]) == 0
    assert capsys.readouterr().out == "20240108\n"


def test_prints_empty_line_when_nothing_is_left(capsys):
    assert main(["20240101", "--now", "20240101"]) == 0
    assert capsys.readouterr().out == "\n"


def test_describe(capsys):
    assert main(["20240101", "w 1,3", "--now", "20240103", "--describe"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["20240108", "weekly on Mon, Wed", "20240108 (in 5 days)"]


def test_invalid_rule(capsys):
    assert main(["20240101", "x 1", "--now", "20240101"]) == 2
    assert "unknown rule kind" in capsys.readouterr().err


def test_invalid_date(capsys):
    assert main(["2024-01-01", "d 1"]) == 2
    assert "YYYYMMDD" in capsys.readouterr().err


def test_oversized_rule_value(capsys):
    assert main(["20240101", "w " + "1" * 5000, "--now", "20240101"]) == 2
    assert "not an integer" in capsys.readouterr().err
