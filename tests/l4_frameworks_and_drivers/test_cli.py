"""Tests for CLI entry point — patches deferred imports at source module level."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
from click.testing import CliRunner

from deepcure import __version__
from deepcure.l1_entities.assistant_category import AssistantCategory
from deepcure.l1_entities.completion import ErrorKind
from deepcure.l1_entities.persona import PERSONAS
from deepcure.l3_interface_adapters.gateways.openai_completion_client import OpenAICompletionClient
from deepcure.l4_frameworks_and_drivers.cli import (
    _preflight_llm,  # noqa: PLC2701 -- testing private helper
    cli,
)
from tests.conftest import FakeCompletionClient

# Patch targets at SOURCE module level (not cli module) because cli() uses
# deferred `from X import Y` which creates local bindings that bypass
# module-level attribute patches.
_CONTAINER = 'deepcure.l4_frameworks_and_drivers.container.DependencyContainer'
_APP = 'deepcure.l4_frameworks_and_drivers.app.App'


def _container_with(client: FakeCompletionClient) -> MagicMock:
    container = MagicMock()
    container.completion_client = client
    return container


class TestPreflightLlm:
    def test_reachable_returns_empty(self):
        client = FakeCompletionClient()
        assert not _preflight_llm(client)

    def test_unreachable_returns_reason(self, capsys):
        client = FakeCompletionClient()
        client.set_connectivity(False, 'Connection refused')

        assert _preflight_llm(client) == 'Connection refused'
        assert 'AI assistant not reachable' in capsys.readouterr().err


class TestCliBasics:
    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'ask' in result.output
        assert 'simplify' in result.output

    def test_missing_config_file_is_usage_error(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ['-c', str(tmp_path / 'nope.yaml'), 'ask', 'hi'])
        assert result.exit_code == 2

    def test_invalid_config_exits_1(self, tmp_path: Path):
        p = tmp_path / 'bad.yaml'
        p.write_text('completion:\n  temperature: 9\n', encoding='utf-8')
        runner = CliRunner()
        result = runner.invoke(cli, ['-c', str(p), 'ask', 'hi'])
        assert result.exit_code == 1
        assert 'invalid configuration' in result.output

    def test_unknown_category_in_config_exits_1(self, tmp_path: Path):
        p = tmp_path / 'bad.yaml'
        p.write_text('assistant:\n  default_category: "Cardiology"\n', encoding='utf-8')
        runner = CliRunner()
        result = runner.invoke(cli, ['-c', str(p), 'ask', 'hi'])
        assert result.exit_code == 1
        assert 'Unknown assistant category' in result.output

    def test_unknown_provider_exits_1(self, tmp_path: Path):
        p = tmp_path / 'bad.yaml'
        p.write_text(f'llm_provider: "bard"\nlog:\n  directory: "{(tmp_path / "logs").as_posix()}"\n', encoding='utf-8')
        runner = CliRunner()
        result = runner.invoke(cli, ['-c', str(p), 'ask', 'hi'])
        assert result.exit_code == 1
        assert 'Unknown llm_provider' in result.output


class TestAskCommand:
    def test_prints_answer(self, sample_config_yaml: Path):
        client = FakeCompletionClient(response='**Drink** more water.')
        with patch(_CONTAINER, return_value=_container_with(client)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'ask', 'Am I dehydrated?'])

        assert result.exit_code == 0
        assert result.output.strip() == 'Drink more water.'
        call = client.complete_calls[0]
        assert call['model'] == 'gpt-4o'
        assert call['temperature'] == 0.2
        assert call['max_tokens'] == 500

    def test_uses_configured_default_category_and_persona_override(self, sample_config_yaml: Path):
        client = FakeCompletionClient()
        with patch(_CONTAINER, return_value=_container_with(client)):
            CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'ask', 'Is coffee bad for me?'])

        system = client.complete_calls[0]['messages'][0]
        assert system.content == 'You are a registered dietitian.'

    def test_assistant_option_is_case_insensitive(self, sample_config_yaml: Path):
        client = FakeCompletionClient()
        with patch(_CONTAINER, return_value=_container_with(client)):
            result = CliRunner().invoke(
                cli, ['-c', str(sample_config_yaml), 'ask', '-a', 'medication', 'Can I take ibuprofen?']
            )

        assert result.exit_code == 0
        system = client.complete_calls[0]['messages'][0]
        assert system.content == PERSONAS[AssistantCategory.MEDICATION]

    def test_unknown_assistant_rejected(self, sample_config_yaml: Path):
        result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'ask', '-a', 'cardiology', 'hi'])
        assert result.exit_code == 2

    def test_blank_query_exits_1(self, sample_config_yaml: Path):
        result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'ask', '   '])
        assert result.exit_code == 1
        assert 'query must not be empty' in result.output

    def test_failure_exits_1_with_description(self, sample_config_yaml: Path):
        client = FakeCompletionClient()
        client.set_failure(ErrorKind.PROVIDER_ERROR, message='rate limited')
        with patch(_CONTAINER, return_value=_container_with(client)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'ask', 'hi'])

        assert result.exit_code == 1
        assert 'Error: API Error: rate limited' in result.output

    def test_missing_api_key_exits_1_cleanly(self, sample_config_yaml: Path, monkeypatch):
        monkeypatch.delenv('OPENAI_API_KEY', raising=False)
        transport = httpx.MockTransport(
            lambda request: httpx.Response(401, json={'error': {'message': 'You did not provide an API key.'}})
        )
        client = OpenAICompletionClient(http_client=httpx.AsyncClient(transport=transport))
        with patch(_CONTAINER, return_value=_container_with(client)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'ask', 'hello'])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert 'Error: API Error: ' in result.output

    def test_writes_log_file(self, sample_config_yaml: Path):
        client = FakeCompletionClient()
        with patch(_CONTAINER, return_value=_container_with(client)):
            CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'ask', 'hi'])

        assert (sample_config_yaml.parent / 'logs' / 'deepcure_debug.log').exists()


class TestSimplifyCommand:
    def test_reads_stdin(self, sample_config_yaml: Path):
        client = FakeCompletionClient(response='Your blood sugar is **high**.')
        with patch(_CONTAINER, return_value=_container_with(client)):
            result = CliRunner().invoke(
                cli, ['-c', str(sample_config_yaml), 'simplify'], input='HbA1c 9.1%, poorly controlled T2DM.\n'
            )

        assert result.exit_code == 0
        assert result.output.strip() == 'Your blood sugar is high.'
        prompt = client.complete_calls[0]['messages'][-1].content
        assert 'HbA1c 9.1%, poorly controlled T2DM.' in prompt

    def test_reads_file(self, sample_config_yaml: Path, tmp_path: Path):
        source = tmp_path / 'report.txt'
        source.write_text('Mild cardiomegaly.', encoding='utf-8')
        client = FakeCompletionClient(response='Your heart is slightly enlarged.')
        with patch(_CONTAINER, return_value=_container_with(client)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'simplify', str(source)])

        assert result.exit_code == 0
        assert 'slightly enlarged' in result.output

    def test_empty_input_exits_1(self, sample_config_yaml: Path):
        result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'simplify'], input='  \n')
        assert result.exit_code == 1
        assert 'no text to simplify' in result.output

    def test_failure_exits_1(self, sample_config_yaml: Path):
        client = FakeCompletionClient()
        client.set_failure(ErrorKind.UNPARSEABLE_RESPONSE)
        with patch(_CONTAINER, return_value=_container_with(client)):
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), 'simplify'], input='text')

        assert result.exit_code == 1
        assert 'Failed to parse API response' in result.output


class TestTuiLaunch:
    def test_runs_app_with_controller(self, sample_config_yaml: Path):
        client = FakeCompletionClient()
        container = _container_with(client)
        with patch(_CONTAINER, return_value=container), patch(_APP) as mock_app_cls:
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml)])

        assert result.exit_code == 0
        _, kwargs = mock_app_cls.call_args
        assert kwargs['controller'] is container.controller
        assert not kwargs['connectivity_error']
        assert kwargs['config'].assistant.default_category == AssistantCategory.NUTRITION
        mock_app_cls.return_value.run.assert_called_once()

    def test_unreachable_provider_still_launches(self, sample_config_yaml: Path):
        client = FakeCompletionClient()
        client.set_connectivity(False, 'Connection refused')
        with patch(_CONTAINER, return_value=_container_with(client)), patch(_APP) as mock_app_cls:
            result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml)])

        assert result.exit_code == 0
        assert 'AI assistant not reachable' in result.output
        _, kwargs = mock_app_cls.call_args
        assert kwargs['connectivity_error'] == 'Connection refused'
