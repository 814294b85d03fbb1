from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import requests
from pytest import CaptureFixture, MonkeyPatch

from docswitch._cli import main

from conftest import BASE_URL, DummyResponse, DummyServer, manifest


def test_resolve_release(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    output = tmp_path / "github_output"
    output.write_text("EXISTING=1\n", encoding="utf-8")
    assert (
        main(
            [
                "-q",
                "resolve",
                "--event",
                "release",
                "--ref",
                "1.4.2",
                "--github-output",
                str(output),
            ]
        )
        == 0
    )
    assert capsys.readouterr().out == "SPHINX_VERSION=1.4\nSPHINX_RELEASE=1.4.2\n"
    assert output.read_text(encoding="utf-8") == (
        "EXISTING=1\nSPHINX_VERSION=1.4\nSPHINX_RELEASE=1.4.2\n"
    )


def test_resolve_from_environment(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    output = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    assert main(["resolve"]) == 0
    assert output.read_text(encoding="utf-8") == (
        "SPHINX_VERSION=dev\nSPHINX_RELEASE=0.0.0+dev\n"
    )


def test_resolve_skipped_tag(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    output = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    assert main(["resolve", "--event", "release", "--ref", "1.2.3-rc1"]) == 0
    assert not output.exists()


def test_publish(
    dummy_server: DummyServer, tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    dummy_server.response = DummyResponse(content=manifest(("dev", "0.0.0+dev")))
    monkeypatch.setenv("SPHINX_VERSION", "1.0")
    monkeypatch.setenv("SPHINX_RELEASE", "1.0.0")
    monkeypatch.setenv("SPHINX_URL", BASE_URL)
    assert main(["publish", "--output-dir", str(tmp_path)]) == 0
    records = json.loads((tmp_path / "versions.json").read_text(encoding="utf-8"))
    assert [(r["name"], r["preferred"]) for r in records] == [
        ("dev", False),
        ("1.0", True),
    ]
    assert (tmp_path / "index.html").exists()


def test_publish_arguments_override_environment(
    dummy_server: DummyServer, tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    monkeypatch.setenv("SPHINX_URL", "https://other.example.org")
    args = ["-q", "publish", "--version", "2.0", "--release", "2.0.1"]
    args += ["--base-url", BASE_URL, "--output-dir", str(tmp_path), "--limit", "1"]
    assert main(args) == 0
    assert dummy_server.requested[0][0] == f"{BASE_URL}/versions.json"
    records = json.loads((tmp_path / "versions.json").read_text(encoding="utf-8"))
    assert records == [
        {
            "name": "2.0",
            "version": "2.0.1",
            "url": f"{BASE_URL}/2.0/",
            "preferred": True,
        }
    ]


def test_publish_without_version_is_skipped(
    tmp_path: Path, capsys: CaptureFixture[str]
) -> None:
    assert main(["publish", "--base-url", BASE_URL, "--output-dir", str(tmp_path)]) == 0
    assert "Skipping publication." in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_publish_fetch_failure(
    dummy_server: DummyServer, tmp_path: Path, capsys: CaptureFixture[str]
) -> None:
    dummy_server.response = DummyResponse(status_code=500)
    args = ["publish", "--version", "1.0", "--release", "1.0.0"]
    args += ["--base-url", BASE_URL, "--output-dir", str(tmp_path / "out")]
    assert main(args) == 1
    assert "[ERROR]" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()


def test_publish_missing_base_url(capsys: CaptureFixture[str]) -> None:
    assert main(["publish", "--version", "1.0", "--release", "1.0.0"]) == 1
    assert "Missing documentation URL." in capsys.readouterr().out


def test_purge(monkeypatch: MonkeyPatch) -> None:
    sent: list[tuple[str, dict[str, str]]] = []

    def fake_post(url: str, headers: dict[str, str], **kwargs: Any) -> DummyResponse:
        sent.append((url, headers))
        return DummyResponse()

    monkeypatch.setattr(requests, "post", fake_post)
    assert main(["purge", "--pullzone", "42", "--token", "key"]) == 0
    assert sent == [("https://api.bunny.net/pullzone/42/purgeCache", {"AccessKey": "key"})]


def test_purge_dry_run(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(requests, "post", pytest.fail)
    assert main(["purge", "--pullzone", "42", "--token", "key", "--dry-run"]) == 0


def test_purge_failure(monkeypatch: MonkeyPatch, capsys: CaptureFixture[str]) -> None:
    monkeypatch.setattr(
        requests, "post", lambda url, **kwargs: DummyResponse(status_code=401)
    )
    assert main(["purge", "--pullzone", "42", "--token", "bad"]) == 1
    assert "Failed to purge Bunny pull zone 42" in capsys.readouterr().out


def test_missing_command() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


@pytest.mark.parametrize(
    "extra, message",
    [
        (["--version", "foo"], "Invalid version name `foo`"),
        (["--version", "1.0", "--limit", "0"], "Limit must be at least 1, got 0."),
    ],
)
def test_publish_invalid_arguments(
    dummy_server: DummyServer,
    tmp_path: Path,
    capsys: CaptureFixture[str],
    extra: list[str],
    message: str,
) -> None:
    args = ["publish", "--release", "1.0.0", "--base-url", BASE_URL]
    args += ["--output-dir", str(tmp_path / "out"), *extra]
    assert main(args) == 1
    assert message in capsys.readouterr().out
    assert dummy_server.requested == []
    assert not (tmp_path / "out").exists()


@pytest.mark.parametrize(
    "args",
    [
        ["purge", "--pullzone", "42"],
        ["purge", "--token", "key"],
    ],
)
def test_purge_missing_configuration_fails(
    monkeypatch: MonkeyPatch, args: list[str]
) -> None:
    monkeypatch.setattr(requests, "post", pytest.fail)
    assert main(args) == 1


def test_purge_dry_run_without_token(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(requests, "post", pytest.fail)
    assert main(["purge", "--pullzone", "42", "--dry-run"]) == 0
