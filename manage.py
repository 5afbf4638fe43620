from __future__ import annotations

import logging
from urllib.parse import urlsplit

import click

from s3lite import S3Connection
from s3lite.errors import Error


def _connection() -> S3Connection:
    return S3Connection()


@click.group()
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log signed requests and responses.",
)
def cli(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def s3():
    """Amazon S3 commands."""


@s3.command()
def ls() -> None:
    """List all buckets and the objects in each of them."""
    with _connection() as conn:
        try:
            for bucket in conn.list_buckets().buckets:
                click.echo(bucket.name)
                result = conn.list_objects(bucket.name)
                for summary in result.object_summaries:
                    click.echo(f"  {summary.key}")
        except Error as exc:
            raise click.ClickException(str(exc)) from exc


@s3.command()
@click.argument("url", type=str)
def cat(url: str) -> None:
    """Write contents of an object at s3://bucket/key to stdout."""
    parts = urlsplit(url)
    if parts.scheme != "s3":
        raise click.ClickException("URL must use 's3' scheme")
    bucket, key = parts.netloc, parts.path.lstrip("/")
    if not key:
        raise click.ClickException("Key not specified")

    with _connection() as conn:
        try:
            result = conn.get_object(bucket, key)
        except Error as exc:
            raise click.ClickException(str(exc)) from exc
    click.get_binary_stream("stdout").write(result.content)


if __name__ == "__main__":
    cli()
