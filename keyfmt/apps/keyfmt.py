#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt command line tool converting key formats and text encodings."""

import asyncio
import logging
import sys
from typing import Optional

import click

from keyfmt import KEYFMT_TEXT_ENCODING
from keyfmt.apps.utils import keyfmt_logger
from keyfmt.apps.utils.common_cli_options import (
    CommandsTreeGroup,
    EnumChoice,
    keyfmt_apps_common_options,
    keyfmt_output_option,
)
from keyfmt.apps.utils.utils import KeyfmtAppError, catch_keyfmt_error
from keyfmt.crypto.codec import decode, encode, recode
from keyfmt.crypto.converter import Converter
from keyfmt.crypto.crypto_types import (
    KEY_FORMATS,
    EccCurve,
    FormatSpec,
    KeyFamily,
    KeyFormat,
    TextEncoding,
    get_family_formats,
)
from keyfmt.crypto.provider import CryptoProvider
from keyfmt.crypto.transitions import legal_transitions
from keyfmt.utils.misc import load_binary, load_text, write_file

logger = logging.getLogger(__name__)

encoding_option = click.option(
    "-e",
    "--encoding",
    type=EnumChoice(TextEncoding),
    default=KEYFMT_TEXT_ENCODING,
    show_default=True,
    help="Text encoding of binary data.",
)


@click.group(name="keyfmt", no_args_is_help=True, cls=CommandsTreeGroup)
@keyfmt_apps_common_options
def main(log_level: int) -> None:
    """Keyfmt tool for converting key formats and text encodings."""
    keyfmt_logger.install(level=log_level)


def _load_key(path: Optional[str], spec: FormatSpec) -> str:
    """Load key file as text; DER files are encoded with the format's text encoding."""
    if not path:
        return ""
    if spec.is_binary:
        assert spec.text_encoding
        return encode(load_binary(path), spec.text_encoding)
    return load_text(path)


def _echo_text(text: str) -> None:
    """Print text; undecodable bytes kept by utf8 encoding can't be shown on console."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise KeyfmtAppError(
            "The data are not valid UTF-8 text, choose another encoding or an output file."
        ) from exc
    click.echo(text)


def _store_key(key: str, path: Optional[str], spec: FormatSpec, name: str) -> None:
    if not key:
        return
    if not path:
        _echo_text(f"{name}:\n{key}")
        return
    if spec.is_binary:
        assert spec.text_encoding
        write_file(decode(key, spec.text_encoding), path, mode="wb")
    else:
        write_file(key, path)
    click.echo(f"{name} has been stored into: {path}")


@main.command(name="convert", no_args_is_help=True)
@click.option(
    "-k",
    "--key-family",
    type=EnumChoice(KeyFamily),
    required=True,
    help="Family of the converted keys.",
)
@click.option(
    "-f",
    "--from-format",
    type=EnumChoice(KeyFormat),
    required=True,
    help="Current format of the keys.",
)
@click.option(
    "-t",
    "--to-format",
    type=EnumChoice(KeyFormat),
    required=True,
    help="Requested format of the keys.",
)
@click.option(
    "-c",
    "--curve",
    type=EnumChoice(EccCurve),
    help="Elliptic curve of the keys, required for ecc key family.",
)
@click.option(
    "--encoding-only",
    is_flag=True,
    default=False,
    help="Skip the container transition check, any pair of formats is passed to the provider.",
)
@encoding_option
@click.option(
    "-p",
    "--private-key",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to private key file.",
)
@click.option(
    "-u",
    "--public-key",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to public key file.",
)
@keyfmt_output_option(
    param_decls=("-op", "--output-private"), help="Path to store converted private key."
)
@keyfmt_output_option(
    param_decls=("-ou", "--output-public"), help="Path to store converted public key."
)
@click.option(
    "--provider",
    default="type=local",
    show_default=True,
    help="Crypto provider doing the conversion, 'type=<identifier>;key=value'.",
)
def convert(
    key_family: KeyFamily,
    from_format: KeyFormat,
    to_format: KeyFormat,
    curve: Optional[EccCurve],
    encoding_only: bool,
    encoding: TextEncoding,
    private_key: Optional[str],
    public_key: Optional[str],
    output_private: Optional[str],
    output_public: Optional[str],
    provider: str,
) -> None:
    """Convert key pair between container formats and serializations."""
    if not (private_key or public_key):
        raise KeyfmtAppError("At least one of private or public key must be specified.")
    from_spec, to_spec = (
        spec.with_encoding(encoding) if spec.is_binary else spec
        for spec in (KEY_FORMATS[from_format], KEY_FORMATS[to_format])
    )
    converter = Converter.for_family(
        key_family, validate_containers=not encoding_only, provider=CryptoProvider.create(provider)
    )
    result = asyncio.run(
        converter.convert(
            _load_key(private_key, from_spec),
            _load_key(public_key, from_spec),
            from_spec,
            to_spec,
            curve,
        )
    )
    _store_key(result.private_key, output_private, to_spec, "Private key")
    _store_key(result.public_key, output_public, to_spec, "Public key")


@main.command(name="encode", no_args_is_help=True)
@encoding_option
@click.option(
    "-i",
    "--input-file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Path to binary file to encode.",
)
@keyfmt_output_option()
def encode_command(encoding: TextEncoding, input_file: str, output: Optional[str]) -> None:
    """Encode binary file into text."""
    text = encode(load_binary(input_file), encoding)
    if output:
        write_file(text, output)
        click.echo(f"Encoded text has been stored into: {output}")
    else:
        _echo_text(text)


@main.command(name="decode", no_args_is_help=True)
@encoding_option
@click.option(
    "-i",
    "--input-file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Path to text file to decode.",
)
@keyfmt_output_option(required=True, help="Path to store decoded binary data.")
def decode_command(encoding: TextEncoding, input_file: str, output: str) -> None:
    """Decode text file into binary file."""
    data = decode(load_text(input_file), encoding)
    write_file(data, output, mode="wb")
    click.echo(f"Decoded {len(data)} bytes have been stored into: {output}")


@main.command(name="recode", no_args_is_help=True)
@click.option(
    "-f",
    "--from-encoding",
    type=EnumChoice(TextEncoding),
    required=True,
    help="Current text encoding.",
)
@click.option(
    "-t",
    "--to-encoding",
    type=EnumChoice(TextEncoding),
    required=True,
    help="Requested text encoding.",
)
@click.option(
    "-i",
    "--input-file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Path to text file to re-encode.",
)
@keyfmt_output_option()
def recode_command(
    from_encoding: TextEncoding,
    to_encoding: TextEncoding,
    input_file: str,
    output: Optional[str],
) -> None:
    """Re-encode text file into another text encoding."""
    text = recode(load_text(input_file), from_encoding, to_encoding)
    if output:
        write_file(text, output)
        click.echo(f"Re-encoded text has been stored into: {output}")
    else:
        _echo_text(text)


@main.command(name="get-encodings")
def get_encodings() -> None:
    """List supported text encodings."""
    for encoding in TextEncoding:
        click.echo(f"{encoding.label}: {encoding.description}")


@main.command(name="get-curves")
def get_curves() -> None:
    """List supported elliptic curves."""
    for curve in EccCurve:
        click.echo(f"{curve.label}: {curve.curve_name}")


@main.command(name="get-formats")
@click.option(
    "-k",
    "--key-family",
    type=EnumChoice(KeyFamily),
    help="List only formats and container transitions of this key family.",
)
def get_formats(key_family: Optional[KeyFamily]) -> None:
    """List key formats."""
    formats = get_family_formats(key_family) if key_family else list(KeyFormat)
    for key_format in formats:
        click.echo(f"{key_format.label}: {KEY_FORMATS[key_format]}")
    if key_family:
        click.echo(f"Legal {key_family.label} container transitions:")
        for from_container, to_container in legal_transitions(key_family):
            click.echo(f"  {from_container.label} -> {to_container.label}")


@catch_keyfmt_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
