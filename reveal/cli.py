"""
Command line entry point.

    reveal testcase1.json testcase2.json
    reveal --labels --verify examples/*.json
    REVEAL_KEY=<hex> reveal --key-env REVEAL_KEY shares.enc

Each input is reconstructed on its own; a failing input is reported on
stderr and the rest still run. Exit status is 1 if any input failed.
"""

import logging
import os
import sys

import click

from reveal.config import RevealConfig
from reveal.errors import RevealError
from reveal.points import MAX_BASE, MIN_BASE, encode_digits
from reveal.reconstruct import solve_many
from reveal.sources import open_source

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _load_key(env_name: str | None) -> bytes | None:
    if not env_name:
        return None
    value = os.environ.get(env_name)
    if not value:
        raise click.UsageError(f"Environment variable {env_name} is not set")
    try:
        return bytes.fromhex(value.strip())
    except ValueError:
        raise click.UsageError(f"{env_name} must hold a hex-encoded key") from None


@click.command()
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("--strict", is_flag=True, help="Fail when shares do not lie on an integer polynomial")
@click.option("--verify", is_flag=True, help="Check every k-subset of shares agrees on the secret")
@click.option("--verify-limit", type=click.IntRange(min=1), default=None, help="Maximum subsets to check with --verify")
@click.option("--strict-count", is_flag=True, help="Fail when the declared n differs from the share count")
@click.option("--jobs", type=click.IntRange(min=1), default=None, help="Inputs to reconstruct in parallel")
@click.option("--key-env", type=str, default=None, help="Environment variable holding the hex AES key for .enc inputs")
@click.option("--base", type=click.IntRange(MIN_BASE, MAX_BASE), default=10, show_default=True, help="Radix used to print secrets")
@click.option("--labels", is_flag=True, help="Print 'Secret from Test Case N:' instead of the file name")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None, help="Logging verbosity")
def main(files, strict, verify, verify_limit, strict_count, jobs, key_env, base, labels, log_level) -> None:
    """Reconstruct the secret held by each share document in FILES."""
    try:
        config = RevealConfig.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from None

    # Flags override the environment
    config.strict = config.strict or strict
    config.verify = config.verify or verify
    config.strict_count = config.strict_count or strict_count
    if verify_limit is not None:
        config.verify_limit = verify_limit
    if jobs is not None:
        config.jobs = jobs
    if log_level is not None:
        config.log_level = log_level.upper()

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not files:
        click.echo("Nothing to do. Pass one or more share documents.")
        return

    key = _load_key(key_env)
    sources = []
    names = []
    failed = False
    for number, path in enumerate(files, 1):
        label = f"Secret from Test Case {number}" if labels else path
        try:
            sources.append(open_source(path, key))
        except RevealError as e:
            click.echo(f"{label}: error: {e}", err=True)
            failed = True
            continue
        names.append(label)

    outcomes = solve_many(sources, config)
    for label, outcome in zip(names, outcomes):
        if not outcome.ok:
            click.echo(f"{label}: error: {outcome.error}", err=True)
            failed = True
            continue

        result = outcome.result
        line = f"{label}: {encode_digits(result.secret, base)}"
        if not result.exact:
            line += " (inexact)"
        if result.verified is False:
            line += " (unverified)"
        click.echo(line)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
