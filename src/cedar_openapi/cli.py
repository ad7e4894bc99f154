"""CLI entry point for cedar-openapi."""

import logging
from pathlib import Path

import click

from cedar_openapi.config import load_config
from cedar_openapi.exceptions import CedarOpenApiError
from cedar_openapi.generator.policies import generate_policies_for_schema
from cedar_openapi.parser.openapi import parse_openapi
from cedar_openapi.schema.assembler import generate_api_mapping_schema

SCHEMA_FILE_NAMES = ("v2.cedarschema.json", "v4.cedarschema.json")

POLICIES_DIR = "policies"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """cedar-openapi: derive Cedar schemas and starter policies from OpenAPI specs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--api-spec", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Path to the OpenAPI spec file (JSON or YAML).")
@click.option("--namespace", envvar="CEDAR_NAMESPACE", default=None, help="Cedar namespace for your application.")
@click.option("--mapping-type", default=None, type=click.Choice(["SimpleRest"]), help="Mapping type.")
@click.option("--base-path", default=None, help="Base path to use when the API declares several servers.")
@click.option("-o", "--output", default=None, type=click.Path(file_okay=False, path_type=Path), help="Output directory for the schema files.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML config file.")
def generate_schema(api_spec: Path, namespace: str | None, mapping_type: str | None, base_path: str | None, output: Path | None, config_path: Path | None):
    """Generate Cedar schema files from an OpenAPI spec."""
    try:
        config = load_config(config_path).merged(
            namespace=namespace,
            mapping_type=mapping_type,
            base_path=base_path,
            output_dir=output,
        )
        click.echo(f"Parsing {api_spec}...")
        document = parse_openapi(api_spec)
        auth_mapping = generate_api_mapping_schema(
            document,
            config.namespace,
            mapping_type=config.mapping_type,
            base_path=config.base_path,
        )
    except (CedarOpenApiError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    config.output_dir.mkdir(parents=True, exist_ok=True)
    v2_path = config.output_dir / SCHEMA_FILE_NAMES[0]
    v4_path = config.output_dir / SCHEMA_FILE_NAMES[1]
    v2_path.write_text(auth_mapping.schema_v2, encoding="utf-8")
    v4_path.write_text(auth_mapping.schema_v4, encoding="utf-8")

    click.echo(f"Cedar schema successfully generated. Your schema files are named: {', '.join(SCHEMA_FILE_NAMES)}.")
    click.echo(f"{SCHEMA_FILE_NAMES[0]} is compatible with Cedar 2.x and 3.x")
    click.echo(f"{SCHEMA_FILE_NAMES[1]} is compatible with Cedar 4.x and required by the Cedar authorization plugins.")


@main.command()
@click.option("--schema", "schema_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Path to the Cedar JSON schema file.")
@click.option("-o", "--output", default=Path("."), type=click.Path(file_okay=False, path_type=Path), help="Directory the policies/ folder is created in.")
def generate_policies(schema_path: Path, output: Path):
    """Generate starter policies for a Cedar schema."""
    try:
        policies = generate_policies_for_schema(schema_path.read_text(encoding="utf-8"))
    except CedarOpenApiError as e:
        raise click.ClickException(str(e)) from e

    policies_dir = output / POLICIES_DIR
    policies_dir.mkdir(parents=True, exist_ok=True)
    for index, policy in enumerate(policies, start=1):
        file_path = policies_dir / f"policy_{index}.cedar"
        file_path.write_text(policy, encoding="utf-8")
        click.echo(f"Cedar policy successfully generated in {POLICIES_DIR}/{file_path.name}")
