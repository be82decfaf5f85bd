import pytest
from PIL import Image

from rasterprint.app import cli


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "dot.png"
    Image.new("RGB", (8, 8), (0, 0, 0)).save(path)
    return str(path)


def test_output_writes_command_stream(tmp_path, image_path):
    out = tmp_path / "job.bin"
    preview = tmp_path / "preview.png"
    status = cli.main([image_path, "--output", str(out), "--width", "8", "--feed", "0", "--preview", str(preview)])
    assert status == 0
    assert out.read_bytes() == b"\x1d\x76\x30\x00\x01\x00\x08\x00" + b"\xff" * 8
    assert preview.exists()


def test_missing_destination(monkeypatch, image_path, capsys):
    monkeypatch.delenv(cli.DEVICE_ENV_VAR, raising=False)
    assert cli.main([image_path]) == 2
    assert "Missing destination" in capsys.readouterr().err


def test_env_var_selects_serial_port(monkeypatch, image_path):
    calls = []
    monkeypatch.setenv(cli.DEVICE_ENV_VAR, "/dev/rfcomm7")
    monkeypatch.setattr(cli, "print_serial", lambda port, data, profile: calls.append((port, profile)) or 0)
    assert cli.main([image_path, "--profile", "turbo", "--delay-ms", "9"]) == 0
    port, profile = calls[0]
    assert port == "/dev/rfcomm7"
    assert profile.chunk_size == 180
    assert profile.inter_chunk_delay_ms == 9


def test_errors_are_reported(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing.png"), "--output", str(tmp_path / "x.bin")]) == 2
    assert "File not found" in capsys.readouterr().err


def test_invalid_chunk_size(image_path, capsys, monkeypatch):
    monkeypatch.setattr(cli, "print_serial", lambda *args: 0)
    assert cli.main([image_path, "--serial", "/dev/null", "--chunk-size", "0"]) == 2
    assert "chunk_size" in capsys.readouterr().err
