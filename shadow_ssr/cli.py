# === FILE: shadow_ssr/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for shadow_ssr.

Commands:
  page        Expand every custom element of an HTML file
  component   Render a single custom element
  config      Show the effective configuration

Common options:
  --config PATH       YAML/JSON config (built-in defaults if omitted)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format string

Also:
  --version, -v       Show the shadow_ssr version

Example:
  shadow-ssr --config render.yaml page index.html -o dist/index.html
"""
import sys
from pathlib import Path

import click

from shadow_ssr import __version__
from shadow_ssr.config import load_config
from shadow_ssr.engine import Engine
from shadow_ssr.logger import configure

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='shadow_ssr, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """shadow_ssr command group."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('page', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Write the rendered page to a file instead of stdout'
)
@click.option('--embed-css/--no-embed-css', default=None, help='Inline component styles')
@click.pass_context
def page(ctx, source, output, embed_css):
    """Render every custom element of SOURCE ('-' reads stdin)."""
    engine = Engine(ctx.obj['config'])
    try:
        rendered = engine.render_page(source.read(), embed_css=embed_css)
    except Exception as e:
        print_error(f'Render failed: {e}')

    if output is None:
        click.echo(rendered)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding='utf-8')
    click.echo(f'Rendered page: {output}', err=True)


@cli.command('component', context_settings=CONTEXT_SETTINGS)
@click.argument('markup')
@click.option('--template', 'template_path', default=None, type=click.Path(path_type=Path),
              help='Explicit template file')
@click.option('--script', 'js_path', default=None, type=click.Path(path_type=Path),
              help='Explicit script file')
@click.option('--style', 'css_path', default=None, type=click.Path(path_type=Path),
              help='Explicit style file')
@click.option('--embed-css/--no-embed-css', default=None, help='Inline the component style')
@click.option('--script-tag/--no-script', 'include_script', default=True, show_default=True,
              help='Append the guarded registration script')
@click.option('--shadow-mode', type=click.Choice(['open', 'closed']), default=None,
              help='Shadow root mode (config default if omitted)')
@click.pass_context
def component(ctx, markup, template_path, js_path, css_path, embed_css, include_script, shadow_mode):
    """Render a single custom element given as MARKUP."""
    engine = Engine(ctx.obj['config'])
    try:
        rendered = engine.render_component(
            markup,
            template_path=template_path,
            js_path=js_path,
            css_path=css_path,
            embed_css=embed_css,
            include_script=include_script,
            shadow_mode=shadow_mode,
        )
    except Exception as e:
        print_error(f'Render failed: {e}')
    click.echo(rendered)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
