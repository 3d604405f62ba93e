## bracefmt — CLI integration tests

import os, sys
import subprocess


def run_cli(*cli_args: str, env: dict | None = None, extra_args: list[str] | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "bracefmt", "--plain"]
    if extra_args:
        args.extend(extra_args)
    args.extend(str(arg) for arg in cli_args)
    merged_env = os.environ.copy()
    merged_env.pop("NO_COLOR", None)
    if env:
        merged_env.update(env)
    return subprocess.run(args, capture_output=True, text=True, env=merged_env)


def test_cli_renders_positional_arguments():
    result = run_cli("Hello, {}! {:>4}", "World", "x")
    assert result.returncode == 0
    assert result.stdout == "Hello, World!    x\n"


def test_cli_named_arguments_and_json():
    result = run_cli("{name} has {count:03} items", extra_args=["--set", "name=Ann", "-s", "count=7", "--json"])
    assert result.returncode == 0
    assert result.stdout == "Ann has 007 items\n"


def test_cli_json_decodes_containers():
    result = run_cli("{0.user.tags:?empty?(none):(tagged)} {0.user.name}", '{"user": {"name": "Bo", "tags": ["a"]}}', extra_args=["-j"])
    assert result.stdout == "tagged Bo\n"


def test_cli_plain_strips_colors():
    result = run_cli("{|red}", "alert")
    assert result.stdout == "alert\n"
    assert "\033[" not in result.stdout


def test_cli_colors_without_plain():
    result = subprocess.run([sys.executable, "-m", "bracefmt", "{|red}", "alert"], capture_output=True, text=True,
                            env={k: v for k, v in os.environ.items() if k != "NO_COLOR"})
    assert result.stdout == "\033[31malert\033[0m\n"


def test_cli_no_newline():
    result = run_cli("{}", "x", extra_args=["-n"])
    assert result.stdout == "x"


def test_cli_expand_env():
    result = run_cli("$BRACEFMT_CLI_DIR/{}", "f", env={"BRACEFMT_CLI_DIR": "/tmp"}, extra_args=["--expand-env"])
    assert result.stdout == "/tmp/f\n"


def test_cli_check_accepts_balanced_format():
    result = run_cli("{a} {{b}}", extra_args=["--check"])
    assert result.returncode == 0
    assert result.stdout == "ok\n"


def test_cli_check_reports_position():
    result = run_cli("Hello {name", extra_args=["--check"])
    assert result.returncode == 1
    assert "FORMAT ERROR." in result.stderr
    assert "unclosed brace" in result.stderr
    assert "column 7" in result.stderr


def test_cli_rejects_bad_assignment():
    result = run_cli("{a}", extra_args=["--set", "novalue"])
    assert result.returncode != 0
    assert "KEY=VALUE" in result.stderr
