import stat
import textwrap
from pathlib import Path
from typing import List

import pytest

from cargo_wrap.core.models import BuildInvocation, BuildResult
from cargo_wrap.core.project import ProjectSettings

CARGO_TOML = textwrap.dedent(
    """
    [package]
    name = "demo"
    version = "0.1.0"
    edition = "2021"

    [dependencies]
    serde = { version = "1", optional = true }

    [features]
    default = ["std"]
    std = []
    serde = ["dep:serde"]
    simd = []
    """
)

FAKE_CARGO = textwrap.dedent(
    """\
    #!/bin/sh
    printf 'args:%s\\n' "$*"
    printf 'target_dir:%s\\n' "${CARGO_TARGET_DIR-<unset>}"
    printf 'rustflags:%s\\n' "${RUSTFLAGS-<unset>}"
    printf 'cwd:%s\\n' "$(pwd -P)"
    echo "warning: unused variable" >&2
    if [ -n "$FAKE_CARGO_SIGNAL" ]; then
        kill -"$FAKE_CARGO_SIGNAL" $$
    fi
    exit "${FAKE_CARGO_EXIT:-0}"
    """
)

class FakeRunner:
    """Command runner that records invocations instead of spawning cargo."""

    def __init__(self, exit_code: int = 0, stdout: bytes = b"", stderr: bytes = b""):
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.calls: List[BuildInvocation] = []

    def __call__(self, invocation: BuildInvocation) -> BuildResult:
        self.calls.append(invocation)
        return BuildResult(
            invocation=invocation,
            exit_code=self.exit_code,
            stdout=self.stdout,
            stderr=self.stderr,
            execution_time=0.01,
        )


@pytest.fixture
def project_dir(tmp_path) -> Path:
    root = tmp_path / "demo"
    root.mkdir()
    (root / "Cargo.toml").write_text(CARGO_TOML, encoding="utf-8")
    return root


@pytest.fixture
def settings(project_dir) -> ProjectSettings:
    return ProjectSettings(project_dir)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner(stdout=b"Compiling demo v0.1.0\n", stderr=b"Finished dev\n")


@pytest.fixture
def fake_cargo(tmp_path) -> Path:
    script = tmp_path / "bin" / "cargo"
    script.parent.mkdir()
    script.write_text(FAKE_CARGO, encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture(autouse=True)
def clean_fake_cargo_env(monkeypatch):
    for name in ("FAKE_CARGO_EXIT", "FAKE_CARGO_SIGNAL", "CARGO_TARGET_DIR", "RUSTFLAGS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_runner():
    return FakeRunner
