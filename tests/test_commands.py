import pytest
import yaml

from tmc import commands
from tmc.config import ConnectionProfile
from tmc.exceptions import CollaboratorError, CommandError, InvalidJobIdError


def lines(ctx):
    return ctx.out.getvalue().splitlines()


@pytest.fixture
def torrent_file(tmp_path):
    path = tmp_path / "debian.torrent"
    path.write_bytes(b"d8:announce0:e")
    return path


class TestAdd:
    def test_prints_ids(self, ctx, fake_client, torrent_file):
        commands.add(ctx, ["https://example.com/a.torrent", str(torrent_file)])
        assert lines(ctx) == ["100", "101"]
        assert fake_client.calls == [
            ("add_from_remote", "https://example.com/a.torrent"),
            ("add_from_local_file", str(torrent_file)),
        ]

    def test_magnet_is_remote(self, ctx, fake_client):
        commands.add(ctx, ["magnet:?xt=urn:btih:abc"])
        assert fake_client.calls == [("add_from_remote", "magnet:?xt=urn:btih:abc")]

    def test_detail(self, ctx):
        commands.add(ctx, ["http://example.com/a.torrent"], detail=True)
        assert lines(ctx) == ["[  100 ][ --- ][ --- ][ -- ] http://example.com/a.torrent"]

    def test_keeps_file_by_default(self, ctx, torrent_file):
        commands.add(ctx, [str(torrent_file)])
        assert torrent_file.exists()

    def test_delete_removes_file(self, ctx, torrent_file):
        commands.add(ctx, [str(torrent_file)], delete=True)
        assert not torrent_file.exists()

    def test_delete_failure_is_an_error(self, ctx, torrent_file, monkeypatch):
        def deny(path):
            raise PermissionError("read-only")

        monkeypatch.setattr(commands.os, "remove", deny)
        with pytest.raises(CommandError) as excinfo:
            commands.add(ctx, [str(torrent_file)], delete=True)
        assert excinfo.value.argument == str(torrent_file)

    def test_failed_add_keeps_file(self, ctx, fake_client, torrent_file):
        fake_client.fail_on.add(str(torrent_file))
        with pytest.raises(CommandError):
            commands.add(ctx, [str(torrent_file)], delete=True)
        assert torrent_file.exists()

    def test_stops_at_first_failure(self, ctx, fake_client):
        fake_client.fail_on.add("http://b")
        with pytest.raises(CommandError) as excinfo:
            commands.add(ctx, ["http://a", "http://b", "http://c"])

        assert excinfo.value.argument == "http://b"
        assert isinstance(excinfo.value.cause, CollaboratorError)
        assert lines(ctx) == ["100"]
        assert ("add_from_remote", "http://c") not in fake_client.calls

    def test_missing_file(self, ctx, tmp_path):
        missing = str(tmp_path / "missing.torrent")
        with pytest.raises(CommandError) as excinfo:
            commands.add(ctx, [missing])
        assert excinfo.value.argument == missing


class TestList:
    def test_all(self, ctx, fake_client):
        commands.ls(ctx, [])
        assert fake_client.calls == [("list_jobs", [])]
        assert lines(ctx) == [
            "[    1 ][ OK! ][ OK! ][ || ] finished.iso",
            "[    2 ][ 95% ][ 75% ][ || ] partial.iso",
            "[    3 ][ OK! ][ 50% ][ >> ] running.iso",
            "[    4 ][ --- ][ --- ][ -- ] unknown.iso",
        ]

    def test_selected(self, ctx, fake_client):
        commands.ls(ctx, ["3", "1"])
        assert fake_client.calls == [("list_jobs", [3, 1])]
        assert len(lines(ctx)) == 2

    def test_bad_id(self, ctx, fake_client):
        with pytest.raises(InvalidJobIdError):
            commands.ls(ctx, ["1", "x"])
        assert fake_client.calls == []
        assert lines(ctx) == []


class TestRemove:
    def test_explicit_ids(self, ctx, fake_client):
        commands.remove(ctx, ["2", "3"], delete=True)
        assert fake_client.calls == [("remove_jobs", [2, 3], True)]
        assert lines(ctx) == ["2", "3"]

    def test_selects_finished_and_stopped(self, ctx, fake_client):
        commands.remove(ctx, [])
        assert fake_client.calls == [("list_jobs", []), ("remove_jobs", [1], False)]
        assert lines(ctx) == ["1"]

    def test_nothing_to_remove(self, ctx, fake_client):
        fake_client.jobs = [job for job in fake_client.jobs if job.id != 1]
        commands.remove(ctx, [])
        assert fake_client.calls == [("list_jobs", [])]
        assert lines(ctx) == []

    def test_bad_id(self, ctx, fake_client):
        with pytest.raises(InvalidJobIdError):
            commands.remove(ctx, ["12", "7", "x"])
        assert fake_client.calls == []


def test_save(ctx):
    ctx.profile = ConnectionProfile(host="nas", port=9091, user="admin", password="secret")
    path = commands.save(ctx)

    assert path == ctx.config_path
    assert f"Save configuration to {path}" in ctx.err.getvalue()
    assert yaml.safe_load(path.read_text()) == {
        "host": "nas", "port": 9091, "https": False, "user": "admin",
        "password": "secret", "useragent": "TorrentCLI",
    }
