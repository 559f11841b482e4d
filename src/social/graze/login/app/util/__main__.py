import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from social.graze.login.app.cli import provision_keys
from social.graze.login.app.config import Settings
from social.graze.login.keys.errors import ProvisioningError, describe_failure
from social.graze.login.keys.fs import LocalFileSystem
from social.graze.login.keys.generator import generate_key_material
from social.graze.login.keys.loader import load_key_material
from social.graze.login.keys.model import (
    DEFAULT_KEY_SIZE,
    KeyFailure,
    SigningOptions,
)
from social.graze.login.keys.validator import validate_key_material

logger = logging.getLogger(__name__)


def checkKeys(settings: Settings) -> int:
    paths = settings.key_paths
    loaded = load_key_material(LocalFileSystem(), paths)
    if isinstance(loaded, KeyFailure):
        failure: Optional[KeyFailure] = loaded
    else:
        failure = validate_key_material(loaded, settings.signing_options)

    if failure is not None:
        print(describe_failure(failure, paths), file=sys.stderr)
        return 1

    print(
        f"Keypair at {paths.private_path} and {paths.public_path} "
        f"is valid for {settings.jwt_algorithm}"
    )
    return 0


def provisionKeys(settings: Settings) -> int:
    try:
        outcome = provision_keys(settings)
    except ProvisioningError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(
        f"{outcome.status.value}: {outcome.paths.private_path} {outcome.paths.public_path}"
    )
    return 0


def genKeypair(algorithm: str, key_size: int) -> int:
    if key_size < DEFAULT_KEY_SIZE:
        print(
            f"Error: key size must be at least {DEFAULT_KEY_SIZE} bits", file=sys.stderr
        )
        return 1
    try:
        material = generate_key_material(SigningOptions(algorithm=algorithm), key_size)
    except ProvisioningError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(material.private_key.decode("utf-8"), end="")
    print(material.public_key.decode("utf-8"), end="")
    return 0


def realMain(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="loginutil", description="Login server key utilities"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    _ = subparsers.add_parser(
        "check", help="Load and validate the configured keypair without writing"
    )
    _ = subparsers.add_parser(
        "provision", help="Load, validate or regenerate the keypair"
    )
    gen_keypair = subparsers.add_parser(
        "generate", help="Print a new PEM keypair to stdout"
    )
    gen_keypair.add_argument(
        "--algorithm", default="RS256", help="Signing algorithm the keys are for."
    )
    gen_keypair.add_argument(
        "--key-size",
        type=int,
        default=DEFAULT_KEY_SIZE,
        help="RSA modulus size in bits.",
    )

    args = vars(parser.parse_args(argv))
    command = args.get("command", None)

    if command == "generate":
        return genKeypair(args["algorithm"], args["key_size"])

    try:
        settings = Settings()  # type: ignore
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    if command == "check":
        return checkKeys(settings)
    return provisionKeys(settings)


def main() -> None:
    logging.basicConfig()
    sys.exit(realMain())


if __name__ == "__main__":
    main()
