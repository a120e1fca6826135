"""End-to-end tests running the CLI as a separate process."""

import json
import os
import re
import subprocess
import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent.parent
_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("SPAN_REPORT_")}
    env.pop("NO_COLOR", None)
    env["TERM"] = "xterm-256color"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(_REPO_ROOT / "src"), os.environ.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "span_report", *args],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )


def _write_inputs(tmp_path: Path) -> tuple[Path, Path]:
    source = tmp_path / "main.lang"
    source.write_text("let\tloop = 1;   \n", encoding="utf-8")
    diagnostic = tmp_path / "diagnostic.json"
    diagnostic.write_text(
        json.dumps(
            {
                "severity": "error",
                "message": "unexpected token",
                "labels": [{"style": "primary", "span": {"file_id": 0, "start": 4, "end": 8}, "message": "a\there"}],
                "notes": ["tab\tnote"],
            }
        ),
        encoding="utf-8",
    )
    return diagnostic, source


def test_demo_writes_samples_and_reports_bogus_span() -> None:
    result = _run("demo", "--color", "never")
    assert result.returncode == 0, result.stderr
    assert "error[E0001]: Unexpected type in `+` application\n" in result.stdout
    assert "help: Great job!\n" in result.stdout
    assert "invalid span 150..400" in result.stderr


def test_colored_and_plain_output_carry_the_same_text(tmp_path: Path) -> None:
    diagnostic, source = _write_inputs(tmp_path)
    plain = _run("render", str(diagnostic), "-s", str(source), "--color", "never")
    colored = _run("render", str(diagnostic), "-s", str(source), "--color", "always")
    assert plain.returncode == 0, plain.stderr
    assert colored.returncode == 0, colored.stderr
    assert "\x1b[" in colored.stdout
    assert _ANSI.sub("", colored.stdout) == plain.stdout
    assert "\t" not in plain.stdout
    assert "1 | let loop = 1;   \n" in plain.stdout


def test_invalid_span_exits_with_error(tmp_path: Path) -> None:
    _, source = _write_inputs(tmp_path)
    diagnostic = tmp_path / "bad.json"
    diagnostic.write_text(
        json.dumps(
            {
                "severity": "bug",
                "message": "YIKES",
                "labels": [{"style": "primary", "span": {"file_id": 0, "start": 2, "end": 900}}],
            }
        ),
        encoding="utf-8",
    )
    result = _run("render", str(diagnostic), "-s", str(source))
    assert result.returncode == 1
    assert result.stdout == ""
    assert "invalid span 2..900" in result.stderr
