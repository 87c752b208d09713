"""Command line interface for :mod:`charterskg`."""

import logging

import click
from dotenv import load_dotenv

from .query import EndpointUrls, select_endpoint

__all__ = [
    "main",
]


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Medieval Charters KG - caching SPARQL proxy.

    Settings are read from the environment, or from a .env file in the
    current directory.
    """
    load_dotenv()

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
        logging.getLogger("charterskg").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", force=True)


@main.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", type=int, default=None, help="Port (default: $PORT or 3000)")
@click.option("--debug", is_flag=True, help="Run Flask in debug mode")
def serve(host: str, port: int | None, debug: bool) -> None:
    """Run the API server.

    Example:
      charterskg serve --port 3000
    """
    # Imported here so that .env values are in place before Config is built
    from .backend.app import create_app
    from .backend.config import Config

    app = create_app()
    app.run(host=host, port=port or Config.PORT, debug=debug or Config.DEBUG)


@main.command()
@click.argument("query")
def route(query: str) -> None:
    """Show which SPARQL endpoint QUERY would be sent to.

    Pass "-" to read the query from standard input.

    Example:
      charterskg route 'SELECT * WHERE { wd:Q1 ?p ?o }'
    """
    if query == "-":
        query = click.get_text_stream("stdin").read()

    from .backend.config import Config

    urls = EndpointUrls(
        wikibase=Config.WIKIBASE_SPARQL_URL,
        wikidata=Config.WIKIDATA_SPARQL_URL,
    )
    endpoint = select_endpoint(query)
    click.echo(f"{endpoint.value}\t{urls.url_for(endpoint)}")


if __name__ == "__main__":
    main()
