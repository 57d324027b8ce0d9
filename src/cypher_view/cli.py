"""Simple CLI for running Cypher queries through the query executor.

Usage examples (from project root):

    # Ensure src is on PYTHONPATH (or install the package), then:
    PYTHONPATH=src python -m cypher_view.cli run-query \
        --query "MATCH (p:Person)-[r:KNOWS]->(q) RETURN p, r, q LIMIT 10"

    PYTHONPATH=src python -m cypher_view.cli run-query --file people.cypher --table

    PYTHONPATH=src python -m cypher_view.cli test-connection

The CLI uses:
- .env configuration (NEO4J_URI, NEO4J_USERNAME, NEO4J_PASSWORD)
- Neo4jClient for connection
- QueryExecutor for execution and result normalization
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional, Sequence

from .config import Config
from .errors import ConnectionError, CypherViewError
from .executor import EMPTY_QUERY_MESSAGE, QueryExecutor
from .graph.coercer import ValueCoercer
from .graph.models import QueryOutcome, ScalarRow
from .neo4j import Neo4jClient


def extract_query(source: str) -> str:
    """Drop blank and comment lines (``//`` or ``#``) and join the rest with spaces."""
    lines = [line.strip() for line in source.splitlines()]
    kept = [
        line
        for line in lines
        if line and not line.startswith("//") and not line.startswith("#")
    ]
    return " ".join(kept).strip()


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


def format_table(rows: Sequence[ScalarRow]) -> str:
    """Render rows as a plain text table. Columns follow first-seen key order."""
    columns: List[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    cells = [[_cell(row.get(col)) for col in columns] for row in rows]
    widths = [
        max([len(col)] + [len(line[i]) for line in cells])
        for i, col in enumerate(columns)
    ]

    def _line(values: Sequence[str]) -> str:
        return " | ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    out = [_line(columns), "-+-".join("-" * w for w in widths)]
    out.extend(_line(line) for line in cells)
    return "\n".join(out)


def _summary_line(outcome: QueryOutcome) -> str:
    summary = outcome.summary
    return (
        f"{summary.node_count} nodes, {summary.relationship_count} relationships "
        f"in {summary.execution_time_ms} ms"
    )


async def _run_query(config: Config, query: str) -> QueryOutcome:
    async with Neo4jClient(config=config) as client:
        executor = QueryExecutor(client, ValueCoercer(config.large_integer_mode))
        return await executor.execute(query)


def _read_query(args: argparse.Namespace) -> str:
    if args.file is not None:
        with open(args.file, encoding="utf-8") as fh:
            return extract_query(fh.read())
    return extract_query(args.query)


def _cmd_run_query(args: argparse.Namespace) -> int:
    """Execute a query and print the normalized outcome."""

    config = Config()
    query = _read_query(args)
    if not query:
        print(f"Query error: {EMPTY_QUERY_MESSAGE}", file=sys.stderr)
        return 1

    try:
        outcome = asyncio.run(_run_query(config, query))
    except ConnectionError as e:
        print(f"Connection error: {e.message}", file=sys.stderr)
        return 1
    except CypherViewError as e:
        print(f"Query error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.table:
        print(_summary_line(outcome))
        if outcome.rows:
            print(format_table(outcome.rows))
        return 0

    # Neo4j may return temporal/spatial types that aren't JSON-serializable
    # by default; use default=str to render them as strings.
    print(json.dumps(outcome.to_dict(), indent=2, default=str))
    return 0


def _cmd_test_connection(args: argparse.Namespace) -> int:
    """Verify that the configured database is reachable."""

    config = Config()
    client = Neo4jClient(config=config)

    try:
        asyncio.run(client.test_connection())
    except ConnectionError as e:
        print(f"Connection failed: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    print(f"Connection successful: {config.neo4j_uri}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CLI for running Cypher queries and viewing normalized results",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # run-query command
    p_run = subparsers.add_parser(
        "run-query",
        help="Execute a Cypher query and print its graph, rows and summary",
    )
    source = p_run.add_mutually_exclusive_group(required=True)
    source.add_argument("--query", type=str, help="Cypher query text")
    source.add_argument(
        "--file",
        type=str,
        help="Path to a file holding the query; // and # comment lines are ignored",
    )
    p_run.add_argument(
        "--table",
        action="store_true",
        help="Print the tabular rows as a text table instead of JSON",
    )
    p_run.set_defaults(func=_cmd_run_query)

    # test-connection command
    p_test = subparsers.add_parser(
        "test-connection",
        help="Check that the configured Neo4j server is reachable",
    )
    p_test.set_defaults(func=_cmd_test_connection)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return

    logging.basicConfig(level=Config().log_level.upper())
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
