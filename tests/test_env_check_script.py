"""Tests for the environment drift detection script."""

from __future__ import annotations

from pathlib import Path

import pytest

from scripts import check_env


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ("TOKEN_SIGNING_SECRET", "APP_ENV"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.mark.parametrize("command", ["record", "verify", "check"])
def test_main_requires_existing_env_file(tmp_path: Path, command: str) -> None:
    env_file = tmp_path / ".missing-env"
    hash_file = tmp_path / ".env.sha256"

    argv = [command, "--env-file", str(env_file)]
    if command != "check":
        argv.extend(["--hash-file", str(hash_file)])

    assert check_env.main(argv) == check_env.EXIT_RUNTIME_ERROR


def test_record_and_verify_detects_rotated_secret(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    hash_file = tmp_path / ".env.sha256"
    _write_env(env_file, TOKEN_SIGNING_SECRET="first-secret")

    argv = ["--env-file", str(env_file), "--hash-file", str(hash_file)]
    assert check_env.main(["record", *argv]) == check_env.EXIT_OK
    assert hash_file.read_text(encoding="utf-8").strip()

    assert check_env.main(["verify", *argv]) == check_env.EXIT_OK

    _write_env(env_file, TOKEN_SIGNING_SECRET="rotated-secret")
    assert check_env.main(["verify", *argv]) == check_env.EXIT_CHECKSUM_ERROR


def test_verify_without_baseline_is_runtime_error(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, TOKEN_SIGNING_SECRET="first-secret")

    exit_code = check_env.main(
        [
            "verify",
            "--env-file",
            str(env_file),
            "--hash-file",
            str(tmp_path / "absent.sha256"),
        ]
    )
    assert exit_code == check_env.EXIT_RUNTIME_ERROR


def test_missing_signing_secret_fails_validation(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("# signing secret intentionally absent\n", encoding="utf-8")

    assert check_env.main(["check", "--env-file", str(env_file)]) == (
        check_env.EXIT_VALIDATION_ERROR
    )


def test_short_secret_is_refused_in_production(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, TOKEN_SIGNING_SECRET="short")
    clean_env.setenv("APP_ENV", "production")

    assert check_env.main(["check", "--env-file", str(env_file)]) == (
        check_env.EXIT_VALIDATION_ERROR
    )


def test_long_secret_passes_in_production(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, TOKEN_SIGNING_SECRET="x" * 48)
    clean_env.setenv("APP_ENV", "production")

    assert check_env.main(["check", "--env-file", str(env_file)]) == check_env.EXIT_OK
