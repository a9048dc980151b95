import json
import logging

import click

from .cli_utils import github_error_annotation, reconstruct_command_line, running_in_github_actions
from .pipeline import (
    InvalidSchemaError,
    MarkerSelection,
    PipelineInvariantError,
    SplitterConfig,
    SubgraphGenerator,
)


class InternalError(click.ClickException):
    """A pipeline invariant broke: a bug, not a problem with the input schema."""

    exit_code = 3


def _fail(exception: click.ClickException) -> click.ClickException:
    if running_in_github_actions():
        click.echo(github_error_annotation(exception.format_message()))
    return exception


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--service-name", "-s", default=None, type=str, help="Service name used when composing a service schema")
@click.option(
    "--marker-selection",
    default=None,
    type=click.Choice([selection.value for selection in MarkerSelection]),
    help="Read only the first join__type marker of a type, or all of them",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every pipeline step")
@click.argument("schema", envvar="INPUT_SCHEMA", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("target", envvar="INPUT_TARGET", type=click.Path(dir_okay=False, resolve_path=True))
def supergraph_to_subgraph(config, service_name, marker_selection, verbose, schema, target):
    """Convert the supergraph (or service) schema SCHEMA into a federation subgraph schema written to TARGET."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            try:
                data = json.load(f)
            except ValueError as e:
                raise click.BadParameter(str(e), param_hint="--config") from e
        if not isinstance(data, dict):
            raise click.BadParameter("the config file must contain a JSON object", param_hint="--config")
        try:
            config = SplitterConfig.from_dict(data)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--config") from e
    else:
        config = SplitterConfig()

    # CLI options override the config file
    if service_name is not None:
        config.service_name = service_name
    if marker_selection is not None:
        config.marker_selection = MarkerSelection(marker_selection)

    generator = SubgraphGenerator(config)
    command_line = reconstruct_command_line(supergraph_to_subgraph)
    try:
        generator.generate_file(schema, target, command_line)
    except InvalidSchemaError as e:
        raise _fail(click.ClickException(str(e))) from e
    except PipelineInvariantError as e:
        raise _fail(InternalError(f"Internal error: {e}")) from e
    except (OSError, UnicodeDecodeError) as e:
        raise _fail(click.ClickException(str(e))) from e
