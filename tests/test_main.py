"""Tests for the composition root."""

import json

import pytest

import main
from ghstats.domain.entities import Failure, Pending, Theme


@pytest.fixture(autouse=True)
def github_env(monkeypatch):
    """Point the CLI at the mock API host with no token."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_API_URL", "https://api.example.test")


class TestReadEnv:
    """Test _read_env."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GITHUB_API_URL")

        token, api_url = main._read_env()

        assert token is None
        assert api_url == "https://api.github.com"

    def test_token_and_url(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "secret")

        token, api_url = main._read_env()

        assert token == "secret"
        assert api_url == "https://api.example.test"


class TestParseArgs:
    """Test parse_args."""

    def test_defaults(self):
        args = main.parse_args(["octocat"])

        assert args.username == "octocat"
        assert args.max_repos == 6
        assert args.theme == "light"
        assert args.json is False

    def test_flags(self):
        args = main.parse_args(["octocat", "--max-repos", "10", "--theme", "dark", "--json"])

        assert args.max_repos == 10
        assert args.theme == "dark"
        assert args.json is True

    def test_rejects_zero_repos(self):
        with pytest.raises(SystemExit):
            main.parse_args(["octocat", "--max-repos", "0"])

    def test_rejects_unknown_theme(self):
        with pytest.raises(SystemExit):
            main.parse_args(["octocat", "--theme", "sepia"])


class TestBuildAndRun:
    """Test build_and_run against the mock API."""

    @pytest.mark.asyncio
    async def test_success_text(self, make_client, profile_payload, repos_payload, capsys):
        client = make_client({
            "/users/octocat": (200, profile_payload),
            "/users/octocat/repos": (200, repos_payload),
        })

        code = await main.build_and_run("octocat", 6, Theme.DARK, client=client)

        out = capsys.readouterr().out
        assert code == 0
        assert "The Octocat (@octocat)  [dark]" in out
        assert "100 followers | 15 stars | 3 forks | 8 repos" in out
        assert "hello-world [Go]" in out

    @pytest.mark.asyncio
    async def test_success_json(self, make_client, profile_payload, repos_payload, capsys):
        client = make_client({
            "/users/octocat": (200, profile_payload),
            "/users/octocat/repos": (200, repos_payload),
        })

        code = await main.build_and_run("octocat", 6, Theme.LIGHT, as_json=True, client=client)

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["status"] == "success"
        assert data["stats"]["total_stars"] == 15
        assert data["stats"]["total_forks"] == 3
        assert data["stats"]["language_counts"] == {"Go": 2}
        assert data["stats"]["chart_data"] == [{"name": "Go", "value": 2}]
        assert data["repositories"][0]["topics"] == ["demo", "go"]

    @pytest.mark.asyncio
    async def test_failure_exit_code(self, make_client, capsys):
        client = make_client({})

        code = await main.build_and_run("octocat", 6, Theme.LIGHT, client=client)

        assert code == 1
        assert "Failed to fetch user data" in capsys.readouterr().out


class TestFormatOutcome:
    """Test format_outcome for non-success states."""

    def test_pending(self):
        assert main.format_outcome(Pending(), Theme.LIGHT) == "Loading..."

    def test_failure_verbatim(self):
        assert main.format_outcome(Failure("Failed to fetch repositories"), Theme.LIGHT) == "Failed to fetch repositories"
