"""CLI entry point for deepcure."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from deepcure import __version__
from deepcure.l1_entities.assistant_category import AssistantCategory


def _load_settings(config_path: str | None):
    """Load (AppConfig, InfraConfig) or exit 1 with the reason."""
    from pydantic import ValidationError  # noqa: PLC0415 -- deferred: pydantic stack not loaded on --help

    from deepcure.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from deepcure.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        InfraConfig,
        build_app_config,
    )

    try:
        raw = YamlConfigLoader().load_raw(config_path)
        config = build_app_config(raw)
        infra = InfraConfig.model_validate(raw)
    except FileNotFoundError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(f'Error: invalid configuration\n{e}', err=True)
        sys.exit(1)
    return config, infra


def _build_container(config, infra):
    from deepcure.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: gateways not loaded on --help
        DependencyContainer,
    )

    try:
        return DependencyContainer(config, infra=infra)
    except ValueError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)


def _setup_logging(config) -> None:
    from deepcure.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: not needed for --help
        setup_file_logging,
    )

    try:
        setup_file_logging(Path(config.log.directory), config.log.level)
    except OSError as e:
        click.echo(f'Warning: file logging disabled ({e}).', err=True)


def _preflight_llm(client) -> str:
    """Return an empty string when the provider answers, else the reason it does not."""
    ok, err = client.check_connectivity()
    if not ok:
        click.echo(f'Warning: AI assistant not reachable ({err}). Questions will fail.', err=True)
        return err
    return ''


def _print_result(result) -> None:
    if result.text is not None:
        click.echo(result.text)
        return
    detail = result.error.describe() if result.error else 'Unknown error'
    click.echo(f'Error: {detail}', err=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path):
    """deepcure -- AI medical guidance assistant. Runs the chat TUI when no command is given."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    if ctx.invoked_subcommand is not None:
        return

    config, infra = _load_settings(config_path)
    container = _build_container(config, infra)
    connectivity_error = _preflight_llm(container.completion_client)

    from deepcure.l4_frameworks_and_drivers.app import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for --help or one-shot commands
        App,
    )

    app = App(config=config, controller=container.controller, connectivity_error=connectivity_error)
    app.run()


@cli.command()
@click.argument('query')
@click.option(
    '-a',
    '--assistant',
    'assistant',
    default=None,
    type=click.Choice([c.label for c in AssistantCategory], case_sensitive=False),
    help='Assistant category (defaults to the configured one).',
)
@click.pass_context
def ask(ctx, query, assistant):
    """Ask the assistant one question and print the answer."""
    from deepcure.l2_use_cases.guidance_use_case import (  # noqa: PLC0415 -- deferred: not needed for --help
        GetGuidanceUseCase,
    )

    if not query.strip():
        click.echo('Error: query must not be empty', err=True)
        sys.exit(1)

    config, infra = _load_settings(ctx.obj.get('config_path'))
    _setup_logging(config)
    container = _build_container(config, infra)

    category = AssistantCategory.from_label(assistant) or config.assistant.default_category
    use_case = GetGuidanceUseCase(container.completion_client, config.completion, config.personas)
    _print_result(asyncio.run(use_case.execute(query, category)))


@cli.command()
@click.argument('source', type=click.File('r', encoding='utf-8'), default='-')
@click.pass_context
def simplify(ctx, source):
    """Rewrite medical text from SOURCE (file or stdin) in patient-friendly language."""
    from deepcure.l2_use_cases.simplify_text_use_case import (  # noqa: PLC0415 -- deferred: not needed for --help
        SimplifyMedicalTextUseCase,
    )

    text = source.read()
    if not text.strip():
        click.echo('Error: no text to simplify', err=True)
        sys.exit(1)

    config, infra = _load_settings(ctx.obj.get('config_path'))
    _setup_logging(config)
    container = _build_container(config, infra)

    use_case = SimplifyMedicalTextUseCase(container.completion_client, config.completion)
    _print_result(asyncio.run(use_case.execute(text)))
