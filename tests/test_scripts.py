from __future__ import annotations

import base64
import os
from datetime import datetime, timezone
from pathlib import Path

import pytest
from typer.testing import CliRunner

from devutils_cli import app
from devutils_cli.scripts import datauri, dp, ips, iso, killni, path, ports
from devutils_cli.shell import CommandResult

runner = CliRunner()

LSOF_OUTPUT = """\
COMMAND   PID USER   FD   TYPE DEVICE SIZE/OFF NODE NAME
node    41122  dev   23u  IPv4 0x1234      0t0  TCP *:3000 (LISTEN)
python  41200  dev    5u  IPv4 0x5678      0t0  TCP 127.0.0.1:30001 (LISTEN)
Google  50001  dev   40u  IPv4 0x9abc      0t0  TCP 192.168.1.5:52100->142.250.72.14:443 (ESTABLISHED)
"""


# --- ports ------------------------------------------------------------------


def test_filter_port_matches_whole_port_numbers() -> None:
    filtered = ports.filter_port(LSOF_OUTPUT, 3000)
    lines = filtered.splitlines()
    assert lines[0].startswith("COMMAND")
    assert len(lines) == 2
    assert "41122" in lines[1]


def test_filter_port_without_matches() -> None:
    assert ports.filter_port(LSOF_OUTPUT, 8080) is None
    assert ports.filter_port("", 80) is None


def test_filter_lines_keeps_header() -> None:
    listening = ports.filter_lines(LSOF_OUTPUT, "(LISTEN)").splitlines()
    assert len(listening) == 3


def test_ports_rejects_invalid_port(fake_shell, set_platform) -> None:
    set_platform("macos")
    result = runner.invoke(app, ["ports", "70000"])
    assert result.exit_code == 1
    assert "Invalid port" in result.output


def test_ports_macos_uses_lsof(fake_shell, set_platform) -> None:
    set_platform("macos")
    fake_shell.present.add("lsof")
    fake_shell.respond("lsof", CommandResult(0, LSOF_OUTPUT))
    result = runner.invoke(app, ["ports", "--listening", "--tcp"])
    assert result.exit_code == 0
    assert fake_shell.commands == ["lsof -iTCP -P -n"]
    assert "41122" in result.output
    assert "ESTABLISHED" not in result.output


def test_ports_linux_falls_back_to_netstat(fake_shell, set_platform) -> None:
    set_platform("fedora")
    fake_shell.present.add("netstat")
    runner.invoke(app, ["ports", "-l"])
    assert fake_shell.commands == ["netstat -n -p -t -u -l"]


def test_ports_linux_without_tools(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    result = runner.invoke(app, ["ports"])
    assert result.exit_code == 1
    assert "Neither ss nor netstat" in result.output


def test_unsupported_platform_exits_non_zero(fake_shell, set_platform) -> None:
    set_platform("unknown")
    result = runner.invoke(app, ["ports"])
    assert result.exit_code == 1
    assert "ports is not supported on Unknown." in result.output


# --- git-push ---------------------------------------------------------------


@pytest.fixture()
def git_repo(fake_shell):
    fake_shell.present.add("git")
    fake_shell.respond("--is-inside-work-tree", CommandResult(0, "true\n"))
    fake_shell.respond("status --porcelain", CommandResult(0, " M README.md\n"))
    fake_shell.respond("branch --show-current", CommandResult(0, "feature/x\n"))
    return fake_shell


def test_git_push_sets_upstream_for_new_branch(git_repo) -> None:
    git_repo.respond("@{u}", CommandResult(128, "", "no upstream"))
    result = runner.invoke(app, ["git-push", "Add readme"])
    assert result.exit_code == 0
    assert git_repo.index("git add -A") < git_repo.index("git commit -m Add readme")
    assert git_repo.commands[-1] == "git push --set-upstream origin feature/x"


def test_git_push_existing_upstream(git_repo) -> None:
    result = runner.invoke(app, ["git-push", "Fix typo"])
    assert result.exit_code == 0
    assert git_repo.commands[-1] == "git push"


def test_git_push_nothing_to_commit(fake_shell) -> None:
    fake_shell.present.add("git")
    fake_shell.respond("--is-inside-work-tree", CommandResult(0, "true\n"))
    result = runner.invoke(app, ["git-push", "noop"])
    assert result.exit_code == 0
    assert "Nothing to commit" in result.output
    assert not fake_shell.ran("git commit")


def test_git_push_outside_repository(fake_shell) -> None:
    fake_shell.present.add("git")
    fake_shell.respond("--is-inside-work-tree", CommandResult(128, "", "not a git repository"))
    result = runner.invoke(app, ["git-push", "msg"])
    assert result.exit_code == 1
    assert "Not inside a git repository." in result.output


def test_git_push_propagates_git_exit_code(git_repo) -> None:
    git_repo.interactive_code = 1
    result = runner.invoke(app, ["git-push", "msg"])
    assert result.exit_code == 1


# --- filesystem helpers ------------------------------------------------------


def test_count_immediate_children(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "nested.txt").write_text("n")
    result = runner.invoke(app, ["count", str(tmp_path)])
    assert result.exit_code == 0
    assert "Files  : 2" in result.output
    assert "Folders: 1" in result.output


def test_count_rejects_files(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x")
    result = runner.invoke(app, ["count", str(target)])
    assert result.exit_code == 1


def test_mkd_creates_nested_directories(tmp_path: Path) -> None:
    target = tmp_path / "one" / "two"
    result = runner.invoke(app, ["mkd", str(target)])
    assert result.exit_code == 0
    assert target.is_dir()
    assert f"Created directory: {target}" in result.output
    assert f'cd "{target}"' in result.output

    again = runner.invoke(app, ["mkd", str(target)])
    assert f"Directory already exists: {target}" in again.output


def test_mkd_refuses_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "taken"
    target.write_text("x")
    result = runner.invoke(app, ["mkd", str(target)])
    assert result.exit_code == 1


def test_path_entries(monkeypatch: pytest.MonkeyPatch) -> None:
    value = os.pathsep.join(["/usr/local/bin", "", "/usr/bin"])
    assert path.path_entries(value) == ["/usr/local/bin", "/usr/bin"]

    monkeypatch.setenv("PATH", value)
    result = runner.invoke(app, ["path"])
    assert result.output.splitlines() == ["/usr/local/bin", "/usr/bin"]


def test_path_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", "")
    result = runner.invoke(app, ["path"])
    assert "PATH environment variable is not set or empty." in result.output


# --- datauri ----------------------------------------------------------------


def test_data_uri_for_text_has_charset() -> None:
    assert datauri.build_data_uri(b"hi", "text/plain") == "data:text/plain;charset=utf-8;base64,aGk="
    assert datauri.build_data_uri(b"{}", "application/json").startswith("data:application/json;charset=utf-8;")


def test_data_uri_for_binary() -> None:
    assert datauri.build_data_uri(b"\x89PNG", "image/png") == "data:image/png;base64,iVBORw=="


def test_mime_guessing() -> None:
    assert datauri.guess_mime_type(Path("logo.PNG")) == "image/png"
    assert datauri.guess_mime_type(Path("font.woff2")) == "font/woff2"
    assert datauri.guess_mime_type(Path("blob.zzunknown")) == "application/octet-stream"


def test_datauri_command(tmp_path: Path) -> None:
    target = tmp_path / "note.txt"
    target.write_bytes(b"hello")
    result = runner.invoke(app, ["datauri", str(target)])
    assert result.exit_code == 0
    assert result.output == "data:text/plain;charset=utf-8;base64," + base64.b64encode(b"hello").decode()


def test_datauri_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["datauri", str(tmp_path / "missing.png")])
    assert result.exit_code == 1


# --- iso --------------------------------------------------------------------

MOMENT = datetime(2024, 3, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)


def test_iso_defaults_to_utc() -> None:
    assert iso.iso_timestamp(now=MOMENT) == "2024-03-01T12:30:45Z"


def test_iso_in_named_zone() -> None:
    assert iso.iso_timestamp("Asia/Tokyo", now=MOMENT) == "2024-03-01T21:30:45+09:00"


def test_iso_unknown_zone() -> None:
    result = runner.invoke(app, ["iso", "Mars/Olympus_Mons"])
    assert result.exit_code == 1
    assert "Unknown time zone: Mars/Olympus_Mons" in result.output


# --- parsers ----------------------------------------------------------------


def test_parse_ip_addr() -> None:
    output = (
        "1: lo    inet 127.0.0.1/8 scope host lo\\       valid_lft forever\n"
        "2: eth0    inet 192.168.1.20/24 brd 192.168.1.255 scope global eth0\n"
    )
    assert ips.parse_ip_addr(output) == [("lo", "127.0.0.1"), ("eth0", "192.168.1.20")]


def test_parse_ifconfig() -> None:
    output = (
        "lo0: flags=8049<UP,LOOPBACK,RUNNING,MULTICAST> mtu 16384\n"
        "\tinet 127.0.0.1 netmask 0xff000000\n"
        "en0: flags=8863<UP,BROADCAST,SMART,RUNNING,SIMPLEX,MULTICAST> mtu 1500\n"
        "\tether a4:83:e7:00:00:00\n"
        "\tinet 192.168.1.5 netmask 0xffffff00 broadcast 192.168.1.255\n"
    )
    assert ips.parse_ifconfig(output) == [("lo0", "127.0.0.1"), ("en0", "192.168.1.5")]


def test_parse_ipconfig() -> None:
    output = (
        "Windows IP Configuration\n"
        "\n"
        "Ethernet adapter Ethernet:\n"
        "\n"
        "   Connection-specific DNS Suffix  . : lan\n"
        "   IPv4 Address. . . . . . . . . . . : 192.168.1.10\n"
        "   Subnet Mask . . . . . . . . . . . : 255.255.255.0\n"
    )
    assert ips.parse_ipconfig(output) == [("Ethernet adapter Ethernet", "192.168.1.10")]


def test_ips_hides_loopback(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.add("ip")
    fake_shell.respond(
        "ip -4 -o addr show",
        CommandResult(0, "1: lo    inet 127.0.0.1/8 scope host lo\n2: eth0    inet 10.0.0.7/24 scope global eth0\n"),
    )
    result = runner.invoke(app, ["ips"])
    assert result.exit_code == 0
    assert "10.0.0.7" in result.output
    assert "127.0.0.1" not in result.output


def test_parse_docker_ps() -> None:
    output = "a1b2c3\tweb\t0.0.0.0:8080->80/tcp\nd4e5f6\tworker\t\n"
    assert dp.parse_ps(output) == [("a1b2c3", "web", "0.0.0.0:8080->80/tcp"), ("d4e5f6", "worker", "")]


def test_dp_without_containers(fake_shell) -> None:
    fake_shell.present.add("docker")
    result = runner.invoke(app, ["dp"])
    assert result.exit_code == 0
    assert "No running containers." in result.output


# --- processes and docker ----------------------------------------------------


def test_killni_kills_inspector_processes(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.respond("--inspect'", CommandResult(0, "123\n456\n"))
    fake_shell.respond("--debug'", CommandResult(0, "123\n"))
    result = runner.invoke(app, ["killni"])
    assert result.exit_code == 0
    kills = [c for c in fake_shell.commands if c.startswith("kill")]
    assert kills == ["kill -9 123", "kill -9 456"]


def test_killni_nothing_running(fake_shell, set_platform) -> None:
    set_platform("macos")
    result = runner.invoke(app, ["killni"])
    assert "No Node inspector processes found." in result.output


def test_docker_clean_requires_confirmation(fake_shell) -> None:
    fake_shell.present.add("docker")
    result = runner.invoke(app, ["docker-clean"], input="n\n")
    assert result.exit_code == 0
    assert "Cancelled." in result.output
    assert fake_shell.commands == []


def test_docker_clean_forced(fake_shell) -> None:
    fake_shell.present.add("docker")
    fake_shell.respond("docker ps -aq", CommandResult(0, "c1\nc2\n"))
    fake_shell.respond("docker images -q", CommandResult(0, "i1\ni1\n"))
    result = runner.invoke(app, ["docker-clean", "--force"])
    assert result.exit_code == 0
    assert "docker rm -f c1 c2" in fake_shell.commands
    assert "docker rmi -f i1" in fake_shell.commands
    assert "No volumes to remove." in result.output


def test_get_video_requires_yt_dlp(fake_shell) -> None:
    result = runner.invoke(app, ["get-video", "https://example.com/v"])
    assert result.exit_code == 1
    assert "yt-dlp is required" in result.output


def test_get_video_invokes_yt_dlp(fake_shell) -> None:
    fake_shell.present.add("yt-dlp")
    result = runner.invoke(app, ["get-video", "https://example.com/v"])
    assert result.exit_code == 0
    assert fake_shell.commands == [
        "yt-dlp --buffer-size 16K --keep-video --prefer-insecure --format mp4 "
        "--ignore-errors --output %(title)s.%(ext)s https://example.com/v"
    ]


def test_clear_dns_cache_linux_prefers_resolvectl(fake_shell, set_platform) -> None:
    set_platform("ubuntu")
    fake_shell.present.update({"resolvectl", "nscd"})
    result = runner.invoke(app, ["clear-dns-cache"])
    assert result.exit_code == 0
    assert fake_shell.commands == ["sudo resolvectl flush-caches"]


def test_clear_dns_cache_windows(fake_shell, set_platform) -> None:
    set_platform("windows")
    runner.invoke(app, ["clear-dns-cache"])
    assert fake_shell.commands == ["ipconfig /flushdns"]


def test_local_ip_prints_address(monkeypatch: pytest.MonkeyPatch) -> None:
    from devutils_cli.scripts import local_ip

    monkeypatch.setattr(local_ip, "primary_ipv4", lambda: "192.168.1.42")
    result = runner.invoke(app, ["local-ip"])
    assert result.output.strip() == "192.168.1.42"
