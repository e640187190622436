"""
Command-line interface for httpsig-jwk
Signs and verifies RFC 9421 signature bases with keys read from JWK files
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .version import __version__
from .config import ToolConfig, LoggingConfig, load_config, configure_logging
from .crypto.jwk import JWKKey, http_signature_algorithm_for, load_jwk_file, load_key
from .exceptions import ConfigurationError, SigningError, JWKError
from .signing.headers import format_signature_headers
from .signing.metadata import collect_signature_parameters
from .signing.raw_signer import RawSigner
from .signing.types import SignatureParameters
from .signing.utils import INTEGER_PATTERN, OFFSET_PATTERN, resolve_created
from .signing.signature_base import build_signature_base_for
from .verification.raw_verifier import RawVerifier
from .verification.utils import strip_signature_delimiters

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def created_option(value: str) -> int:
    """argparse type for --created: epoch seconds or "now", resolved immediately"""
    try:
        return resolve_created(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(e.message)


def expires_option(value: str):
    """argparse type for --expires: epoch seconds or "+N" (resolved after parsing)"""
    text = value.strip()
    if OFFSET_PATTERN.match(text):
        return text
    if INTEGER_PATTERN.match(text):
        return int(text)
    raise argparse.ArgumentTypeError(f"expires must be an integer or +N, got {value!r}")


def parameter_option(value: str) -> Tuple[str, object]:
    """argparse type for --param NAME=VALUE; integer values stay integers"""
    name, sep, raw = value.partition('=')
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"parameter must be NAME=VALUE, got {value!r}")
    if INTEGER_PATTERN.match(raw):
        return name, int(raw)
    return name, raw


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-k', '--key', required=True, help='JWK file')
    parser.add_argument(
        '-c', '--component',
        action='append',
        default=[],
        metavar='LINE',
        help='Component line such as \'"@method": GET\' (repeatable, order kept)'
    )
    parser.add_argument('--alg', help='alg signature parameter')
    parser.add_argument('--created', type=created_option, help='created parameter: epoch seconds or "now"')
    parser.add_argument('--expires', type=expires_option, help='expires parameter: epoch seconds or +N')
    parser.add_argument('--keyid', help='keyid signature parameter')
    parser.add_argument('--nonce', help='nonce signature parameter')
    parser.add_argument('--tag', help='tag signature parameter')
    parser.add_argument(
        '--param',
        action='append',
        default=[],
        type=parameter_option,
        metavar='NAME=VALUE',
        help='Additional signature parameter (repeatable)'
    )
    parser.add_argument(
        '--include-key-id',
        action='store_true',
        default=None,
        help='Use the JWK "kid" as keyid when --keyid is not given'
    )
    parser.add_argument(
        '--include-alg',
        action='store_true',
        help='Use the registered algorithm name of the key as alg when --alg is not given'
    )
    parser.add_argument('--print-signature', action='store_true', help='Print the base64 signature')
    parser.add_argument('--print-signature-base', action='store_true', help='Print the signature base')
    parser.add_argument('--print-signature-metadata', action='store_true', help='Print the @signature-params value')


def setup_sign_parser(subparsers) -> None:
    """Setup sign subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Sign component lines with a private JWK')
    _add_common_arguments(sign_parser)
    sign_parser.add_argument('--label', help='Signature label for --print-signature-headers')
    sign_parser.add_argument(
        '--print-signature-headers',
        action='store_true',
        help='Print Signature-Input and Signature headers'
    )


def setup_verify_parser(subparsers) -> None:
    """Setup verify subcommand."""
    verify_parser = subparsers.add_parser('verify', help='Verify a signature over component lines')
    _add_common_arguments(verify_parser)
    verify_parser.add_argument('-s', '--signature', required=True, help='Signature as :<base64>: or <base64>')
    verify_parser.add_argument('--print-result', action='store_true', help='Print true or false')


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='httpsig-jwk',
        description='Sign and verify RFC 9421 HTTP message signatures with JWKs'
    )
    parser.add_argument('--version', action='version', version=f'httpsig-jwk {__version__}')
    parser.add_argument('--config', help='JSON configuration file')
    parser.add_argument('--log-level', help='Logging level (overrides configuration)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    setup_sign_parser(subparsers)
    setup_verify_parser(subparsers)

    return parser


def collect_parameters(args, config: ToolConfig, key: Optional[JWKKey]) -> SignatureParameters:
    """
    Turn parsed options into SignatureParameters.

    Raises:
        ConfigurationError: If a parameter is invalid
    """
    include_key_id = args.include_key_id if args.include_key_id is not None else config.signing.include_key_id
    keyid = args.keyid
    if keyid is None and include_key_id and key is not None:
        keyid = key.key_id

    alg = args.alg
    if alg is None and args.include_alg and key is not None:
        alg = http_signature_algorithm_for(key.algorithm)

    return collect_signature_parameters(
        alg=alg,
        created=args.created,
        expires=args.expires,
        keyid=keyid,
        nonce=args.nonce,
        tag=args.tag,
        extensions=dict(args.param)
    )


def handle_sign_command(args, config: ToolConfig) -> int:
    """Handle the sign command."""
    try:
        key = load_key(load_jwk_file(args.key))
        params = collect_parameters(args, config, key)
        signer = RawSigner(key)
        result = signer.sign_components(args.component, params)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE
    except SigningError as e:
        print(f"Error signing: {e.message}", file=sys.stderr)
        return EXIT_FAILURE

    selected = (
        args.print_signature or args.print_signature_base or
        args.print_signature_metadata or args.print_signature_headers
    )

    if args.print_signature_base:
        print(result.signature_base)
    if args.print_signature_metadata:
        print(result.signature_metadata)
    if args.print_signature_headers:
        label = args.label or config.signing.label
        try:
            headers = format_signature_headers(label, result.signature_metadata, result.signature)
        except ConfigurationError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return EXIT_USAGE
        for name, value in headers.items():
            print(f"{name}: {value}")
    if args.print_signature or not selected:
        print(result.encoded_signature)

    return EXIT_OK


def handle_verify_command(args, config: ToolConfig) -> int:
    """Handle the verify command. A failed verification still exits 0."""
    key = None
    try:
        key = load_key(load_jwk_file(args.key))
    except JWKError as e:
        logger.warning(f"Verification key unusable: {e.message}")

    try:
        params = collect_parameters(args, config, key)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE

    if key is not None:
        valid = RawVerifier(key).verify_components(args.component, params, args.signature)
    else:
        valid = False

    selected = (
        args.print_signature or args.print_signature_base or
        args.print_signature_metadata or args.print_result
    )

    if args.print_signature_base or args.print_signature_metadata:
        signature_base, signature_metadata = build_signature_base_for(args.component, params)
        if args.print_signature_base:
            print(signature_base)
        if args.print_signature_metadata:
            print(signature_metadata)
    if args.print_signature:
        print(strip_signature_delimiters(args.signature))
    if args.print_result or not selected:
        print('true' if valid else 'false')

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        if args.log_level:
            config.logging = LoggingConfig(level=args.log_level, format=config.logging.format)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(config.logging)

    try:
        if args.command == 'sign':
            return handle_sign_command(args, config)
        elif args.command == 'verify':
            return handle_verify_command(args, config)
        else:
            parser.print_help()
            return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
