"""Command line option descriptors and the click-backed parser.

knob does not parse flags itself. Registered descriptors are turned into a
throwaway :class:`click.Command` whose context carries the resolved values, so
flag syntax, clustering of short options and error messages are click's.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import click
from click.core import ParameterSource

from .errors import FailureKind, ParseFailure


@dataclass(frozen=True)
class OptionDescriptor:
    """A registered command line option.

    ``hint`` is shown in the usage text only. ``default`` is applied when the
    option is not supplied; leave it ``None`` to keep the setting unset.
    """

    short_name: str
    long_name: str
    description: str = ""
    hint: str = ""
    required: bool = False
    is_flag: bool = False
    default: str | None = None

    def __post_init__(self) -> None:
        if not self.long_name:
            raise ValueError("an option needs a long name")
        if len(self.short_name) > 1:
            raise ValueError(f"short name must be a single character: {self.short_name!r}")


def optopt(short_name: str, long_name: str, description: str = "", hint: str = "") -> OptionDescriptor:
    """An option taking a value that may be left out."""
    return OptionDescriptor(short_name, long_name, description, hint)


def reqopt(short_name: str, long_name: str, description: str = "", hint: str = "") -> OptionDescriptor:
    """An option taking a value that must be given."""
    return OptionDescriptor(short_name, long_name, description, hint, required=True)


def optflag(short_name: str, long_name: str, description: str = "") -> OptionDescriptor:
    """A flag without a value. Stored as ``"True"`` when given."""
    return OptionDescriptor(short_name, long_name, description, is_flag=True)


def _param_name(index: int) -> str:
    # Positional names give each descriptor its own slot in ``ctx.params``.
    return f"opt_{index}"


def _to_click(index: int, descriptor: OptionDescriptor) -> click.Option:
    decls = [f"--{descriptor.long_name}"]
    if descriptor.short_name:
        decls.insert(0, f"-{descriptor.short_name}")
    decls.append(_param_name(index))
    if descriptor.is_flag:
        return click.Option(decls, is_flag=True, default=False, help=descriptor.description)
    return click.Option(
        decls,
        type=click.STRING,
        required=descriptor.required,
        # An explicit None default counts as a value on current click.
        **({} if descriptor.default is None else {"default": descriptor.default}),
        metavar=descriptor.hint or None,
        help=descriptor.description,
    )


def build_command(name: str, options: Sequence[OptionDescriptor]) -> click.Command:
    return click.Command(
        name,
        params=[_to_click(i, d) for i, d in enumerate(options)],
        add_help_option=False,
        context_settings={"allow_extra_args": True},
    )


class ParsedOptions:
    """Resolved option values from a successful parse."""

    def __init__(self, ctx: click.Context, options: Sequence[OptionDescriptor]) -> None:
        self._ctx = ctx
        self._options = list(options)
        self.free: list[str] = list(ctx.args)

    def value(self, index: int) -> str | None:
        descriptor = self._options[index]
        name = _param_name(index)
        source = self._ctx.get_parameter_source(name)
        given = source is ParameterSource.COMMANDLINE
        if descriptor.is_flag:
            return "True" if given else None
        if not given and descriptor.default is None:
            return None
        return self._ctx.params.get(name)

    def items(self) -> list[tuple[OptionDescriptor, str | None]]:
        return [(d, self.value(i)) for i, d in enumerate(self._options)]


def _failure(exc: click.UsageError, options: Sequence[OptionDescriptor]) -> ParseFailure:
    message = exc.format_message()
    if isinstance(exc, click.MissingParameter):
        option = None
        if exc.param is not None and exc.param.name and exc.param.name.startswith("opt_"):
            option = options[int(exc.param.name[len("opt_") :])].long_name
        return ParseFailure(FailureKind.OPTION_MISSING, message, option)
    if isinstance(exc, click.NoSuchOption):
        return ParseFailure(FailureKind.UNRECOGNIZED_OPTION, message, exc.option_name)
    if isinstance(exc, click.BadOptionUsage):
        return ParseFailure(FailureKind.ARGUMENT_MISSING, message, exc.option_name)
    return ParseFailure(FailureKind.UNEXPECTED_ARGUMENT, message)


def parse_args(
    prog_name: str, options: Sequence[OptionDescriptor], args: Sequence[str]
) -> ParsedOptions | ParseFailure:
    """Parse ``args`` (without the program name) against ``options``."""
    command = build_command(prog_name, options)
    try:
        ctx = command.make_context(prog_name, list(args))
    except click.UsageError as exc:
        return _failure(exc, options)
    return ParsedOptions(ctx, options)


def format_usage(brief: str, options: Sequence[OptionDescriptor], width: int = 78) -> str:
    """Render ``brief`` followed by one entry per option, in order."""
    command = build_command("", options)
    ctx = click.Context(command)
    formatter = click.HelpFormatter(width=width)
    formatter.write(f"{brief}\n")
    rows = [rec for rec in (p.get_help_record(ctx) for p in command.params) if rec is not None]
    if rows:
        formatter.write_paragraph()
        with formatter.section("Options"):
            formatter.write_dl(rows)
    return formatter.getvalue()
