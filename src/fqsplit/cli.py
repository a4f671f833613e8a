#!filepath: src/fqsplit/cli.py
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from fqsplit import __version__, logs
from fqsplit.config.app_config import AppConfig
from fqsplit.observability.instrumentation import Instrumentation
from fqsplit.splitter.runner import SplitResult, run_split
from fqsplit.utils.errors import SplitError, UserInputError
from fqsplit.utils.filesystem import FileSystem

app = typer.Typer(help="Split a FASTQ stream into one file per read group", add_completion=False)

console = Console(stderr=True)


def _version_callback(value: bool):
    if value:
        console.print(f"fqsplit v{__version__}")
        raise typer.Exit()


def _print_summary(result: SplitResult):
    table = Table(title=f"fqsplit ({result.mode}, {result.elapsed:.2f}s)")
    table.add_column("read group")
    table.add_column("file")
    table.add_column("lines", justify="right")
    table.add_column("size", justify="right")

    for key in sorted(result.groups):
        path = result.outputs[key]
        table.add_row(
            key,
            path,
            str(result.groups[key]),
            FileSystem.format_size(FileSystem.get_file_size(path)),
        )

    console.print(table)


@app.command()
def split(
    input_file: Optional[str] = typer.Argument(
        None, help="input FASTQ (.gz is decompressed); reads stdin when omitted"
    ),
    delim: Optional[str] = typer.Option(
        None, "--delim", "-d", help="delimiter character for the fastq header fields [default: ':']"
    ),
    join: Optional[str] = typer.Option(
        None, "--join", "-j",
        help="character used to join the selected key values into the read group ID [default: '.']",
    ),
    parallel: bool = typer.Option(
        False, "--parallel", "-p",
        help="read input on a separate thread (mostly useful for .gz input)",
    ),
    buffer_size: Optional[int] = typer.Option(
        None, "--buffer-size", "-b",
        help="queue size (number of lines) when using --parallel [default: 10000]",
    ),
    suffix: Optional[str] = typer.Option(
        None, "--suffix", help="suffix for all output file names [default: '.fastq']"
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="prefix for all output file names [default: '']"
    ),
    keys: Optional[str] = typer.Option(
        None, "--keys", "-k",
        help="comma delimited 0-based field keys used to build the read group [default: 2,3]",
    ),
    header_prefix: Optional[str] = typer.Option(
        None, "--header-prefix", help="first character of a header line [default: '@']"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", help="YAML config file (CLI options override it)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="TRACE / DEBUG / INFO / SUCCESS / WARNING / ERROR / CRITICAL"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="do not print the summary table"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="show version and exit"
    ),
):
    """
    Split FASTQ reads into files named <prefix><read group><suffix> in the current directory.
    """
    try:
        cfg = AppConfig.load(config).with_log_level(log_level)
        logs.configure(cfg.log)

        cfg = cfg.with_split_overrides(
            header_delim=delim,
            join_char=join,
            parallel=True if parallel else None,
            buffer_size=buffer_size,
            file_suffix=suffix,
            file_prefix=prefix,
            field_keys=keys,
            header_prefix=header_prefix,
        )

        inst = Instrumentation(enabled=True)
        result = run_split(input_file, cfg.split, inst=inst)

    except SplitError as e:
        logs.error(f"[{e.kind}] {e}")
        raise typer.Exit(code=1)
    except (UserInputError, FileNotFoundError) as e:
        logs.error(f"[config] {e}")
        raise typer.Exit(code=1)

    inst.generate_timeline_report(input_file or "<stdin>")
    if not quiet:
        _print_summary(result)


def main():
    app(prog_name="fqsplit")


if __name__ == "__main__":
    main()

# python -m fqsplit reads.fastq.gz -k 2,3 -p
