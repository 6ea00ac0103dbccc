import argparse
import os
import sys
from typing import List, Optional

import nacl.encoding
import nacl.exceptions
import nacl.signing

from edkey.config import Config, load_config
from edkey.errors import ConfigurationError, EdkeyError
from edkey.fingerprint import key_fingerprint
from edkey.keys import KeyPair
from edkey.logging_config import configure_logging, get_logger
from edkey.openssh import public_key_line, to_pem
from edkey.reader import parse_private_key

logger = get_logger(__name__)

STDOUT_PATH = "-"


def write_key_file(path: str, data: bytes, mode: int, overwrite: bool):
    """Write ``data`` to ``path`` with ``mode``, refusing to clobber unless ``overwrite``."""
    output_dir = os.path.dirname(path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    flags = os.O_WRONLY | os.O_CREAT | (os.O_TRUNC if overwrite else os.O_EXCL)
    try:
        fd = os.open(path, flags, mode)
    except FileExistsError:
        raise ConfigurationError(f"{path} already exists; use --force to overwrite") from None
    with os.fdopen(fd, 'wb') as f:
        f.write(data)
    # os.open only applies mode to new files
    os.chmod(path, mode)


def load_seed_file(path: str) -> KeyPair:
    """Load a hex-encoded 32-byte seed, as written by PyNaCl's HexEncoder."""
    with open(path, 'rb') as f:
        seed_hex = f.read().strip()
    try:
        signing_key = nacl.signing.SigningKey(seed_hex, encoder=nacl.encoding.HexEncoder)
    except (ValueError, TypeError, nacl.exceptions.CryptoError) as e:
        raise ConfigurationError(f"{path} does not contain a hex-encoded Ed25519 seed: {e}") from e
    return KeyPair.from_key(signing_key)


def save_keypair(keypair: KeyPair, config: Config) -> str:
    keygen = config.keygen
    pem = to_pem(keypair, keygen.comment)
    fingerprint = key_fingerprint(keypair)

    if keygen.output_path == STDOUT_PATH:
        sys.stdout.buffer.write(pem)
        sys.stdout.flush()
        return fingerprint

    pub_path = keygen.output_path + ".pub" if keygen.write_public_key else None
    if not keygen.overwrite:
        for path in (keygen.output_path, pub_path):
            if path is not None and os.path.exists(path):
                raise ConfigurationError(f"{path} already exists; use --force to overwrite")

    write_key_file(keygen.output_path, pem, keygen.file_mode, keygen.overwrite)
    log = logger.bind_context(path=keygen.output_path, fingerprint=fingerprint)
    log.info("Wrote private key")

    if pub_path is not None:
        line = public_key_line(keypair, keygen.comment) + "\n"
        try:
            write_key_file(pub_path, line.encode('utf-8'), 0o644, keygen.overwrite)
        except (EdkeyError, OSError):
            # No private key without its public half
            os.remove(keygen.output_path)
            raise
        log.info("Wrote public key", public_path=pub_path)

    print(f"Your identification has been saved in {keygen.output_path}")
    print(f"The key fingerprint is: {fingerprint} {keygen.comment}".rstrip())
    return fingerprint


def cmd_generate(args, config: Config) -> int:
    save_keypair(KeyPair.generate(), config)
    return 0


def cmd_convert(args, config: Config) -> int:
    save_keypair(load_seed_file(args.seed_file), config)
    return 0


def cmd_fingerprint(args, config: Config) -> int:
    with open(args.key_file, 'rb') as f:
        parsed = parse_private_key(f.read())
    comment = parsed.comment.decode('utf-8', errors='replace') or "no comment"
    print(f"256 {parsed.fingerprint} {comment} (ED25519)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edkey",
        description="Write Ed25519 keys in the OpenSSH private key format."
    )
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-json", action="store_true", default=None, help="Emit JSON log lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_output_args(sub):
        sub.add_argument("-o", "--output", type=str, default=None,
                         help="Private key path, or - for stdout (public key goes to PATH.pub)")
        sub.add_argument("-C", "--comment", type=str, default=None, help="Key comment")
        sub.add_argument("--force", action="store_true", default=None, help="Overwrite existing files")

    generate = subparsers.add_parser("generate", help="Generate a new key")
    add_output_args(generate)
    generate.set_defaults(func=cmd_generate)

    convert = subparsers.add_parser("convert", help="Convert a hex-encoded Ed25519 seed file")
    convert.add_argument("seed_file", type=str)
    add_output_args(convert)
    convert.set_defaults(func=cmd_convert)

    fingerprint = subparsers.add_parser("fingerprint", help="Show the fingerprint of a private key file")
    fingerprint.add_argument("key_file", type=str)
    fingerprint.set_defaults(func=cmd_fingerprint)

    return parser


def apply_args(config: Config, args) -> Config:
    """Command-line flags override the config file and environment."""
    if args.log_level is not None:
        config.logging.log_level = args.log_level
    if args.log_json is not None:
        config.logging.json_output = args.log_json
    if getattr(args, "output", None) is not None:
        config.keygen.output_path = args.output
    if getattr(args, "comment", None) is not None:
        config.keygen.comment = args.comment
    if getattr(args, "force", None) is not None:
        config.keygen.overwrite = args.force
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # stderr logging until the configured level and format are known
    configure_logging()
    try:
        config = apply_args(load_config(args.config), args)
        configure_logging(config.logging.log_level, config.logging.json_output)
        return args.func(args, config)
    except (EdkeyError, ValueError, OSError) as e:
        logger.error("edkey failed", command=args.command, error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
