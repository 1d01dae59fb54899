# tests/test_cli.py
"""
Tests for the command line interface. Requires libclang.
"""

import json

import pytest

from globalscope.cli import main


SOURCE = """\
int counter;

void increment(void) {
    counter++;
}
"""


@pytest.fixture
def source(cindex, tmp_path):
    path = tmp_path / "counter.c"
    path.write_text(SOURCE, encoding="utf-8")
    return path


class TestCli:

    def test_text_output(self, source, capsys):
        assert main([str(source)]) == 0
        out = capsys.readouterr().out
        assert "Bad Implementation of Global Variable 'counter' Found in 'increment'" in out
        assert "warning=1" in out

    def test_json_output(self, source, tmp_path):
        output = tmp_path / "report.json"
        assert main([str(source), "--json", "--output", str(output)]) == 0
        (report,) = json.loads(output.read_text(encoding="utf-8"))
        assert report["summary"] == {"warning": 1}
        assert report["issues"][0]["line"] == 1
        assert report["issues"][0]["category"] == "global-variable"

    def test_compiler_style_output(self, source, capsys):
        assert main([str(source), "--compiler-style"]) == 0
        out = capsys.readouterr().out.strip()
        assert out == f"{source.resolve()}:1:5: warning: Bad Implementation of Global Variable 'counter' Found in 'increment'"

    def test_missing_source(self, cindex, tmp_path):
        with pytest.raises(FileNotFoundError):
            main([str(tmp_path / "missing.c")])

    def test_stop_on_error(self, source, tmp_path, capsys):
        broken = tmp_path / "broken.c"
        broken.write_text("int broken(void) {\n", encoding="utf-8")
        assert main([str(broken), str(source), "--stop-on-error", "--json"]) == 1
        reports = json.loads(capsys.readouterr().out)
        assert len(reports) == 1
        assert reports[0]["issues"][0]["severity"] == "error"

    def test_span_policy_choice(self, source):
        with pytest.raises(SystemExit):
            main([str(source), "--span-policy", "outermost"])
