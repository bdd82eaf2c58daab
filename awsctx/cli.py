"""
awsctx CLI

Command-line context switcher for profiles in the AWS CLI credentials file.
Run without a subcommand to pick a context interactively.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .configs import Configs
from .contexts import Context, ContextService
from .errors import CTXError, NoContextIsSelected, UnexpectedError
from .utils.completion import SUPPORTED_SHELLS, completion_script
from .utils.identity import get_caller_identity

logger = logging.getLogger("awsctx")


def setup_logging(verbose: bool = False):
    """Send log records to stderr, debug records only with --verbose."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def format_context_list(contexts: List[Context]) -> str:
    """Format contexts for display."""
    if not contexts:
        return "No AWS profiles found."
    return "\n".join(c.label for c in contexts)


def build_service(args, with_configs: bool = False) -> ContextService:
    configs = Configs.initialize_default_configs(args.configs) if with_configs else None
    return ContextService(configs=configs, credentials_path=args.credentials)


def handle_list(args):
    """Handle the list-contexts command."""
    contexts = build_service(args).list_contexts()
    if args.plain:
        for c in contexts:
            print(c.name)
    else:
        print(format_context_list(contexts))


def handle_active(args):
    """Handle the active-context command."""
    print(build_service(args).get_active_context().name)


def handle_use(args):
    """Handle the use-context command."""
    context = build_service(args).use_context(args.profile)
    print(f"✅ {context.name} is activated")


def handle_auth(args):
    """Handle the auth command."""
    context = build_service(args, with_configs=True).auth(args.profile)
    print(f"✅ {context.name} is authenticated and activated")


def handle_refresh(args):
    """Handle the refresh command."""
    context = build_service(args, with_configs=True).refresh()
    print(f"✅ {context.name} is refreshed")


def handle_completion(args):
    """Print the shell completion script."""
    print(completion_script(args.shell))


def handle_whoami(args):
    """Handle the whoami command."""
    identity = get_caller_identity(args.profile)
    print(f"Account: {identity['account']}")
    print(f"ARN: {identity['arn']}")
    if identity["auth_method"]:
        print(f"Auth method: {identity['auth_method']}")
    if identity["user_identity"]:
        print(f"Identity: {identity['user_identity']}")


def handle_interactive(args):
    """Pick a context with fzf. Cancelling is not an error."""
    try:
        context = build_service(args).use_context_interactive()
    except NoContextIsSelected:
        logger.debug("no context is selected")
        return
    print(f"✅ {context.name} is activated")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="awsctx",
        description="Context Manager for AWS Profiles - manage profiles in a credentials of AWS CLI"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logs")
    parser.add_argument("--credentials", default=os.environ.get("AWSCTX_CREDENTIALS"),
                        help="Path to the AWS credentials file (default: ~/.aws/credentials)")
    parser.add_argument("--configs", default=os.environ.get("AWSCTX_CONFIGS"),
                        help="Path to the awsctx configs (default: ~/.awsctx/configs.yaml)")
    parser.set_defaults(func=handle_interactive)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    list_parser = subparsers.add_parser("list-contexts", help="Lists profiles in AWS CLI")
    list_parser.add_argument("--plain", action="store_true", help="Print profile names only")
    list_parser.set_defaults(func=handle_list)

    use_parser = subparsers.add_parser("use-context", help="Updates default context by a profile name")
    use_parser.add_argument("--profile", "-p", required=True, help="Profile name")
    use_parser.set_defaults(func=handle_use)

    active_parser = subparsers.add_parser("active-context", help="Shows the active context")
    active_parser.set_defaults(func=handle_active)

    auth_parser = subparsers.add_parser("auth", help="Runs the auth script of a profile and activates it")
    auth_parser.add_argument("--profile", "-p", required=True, help="Profile name")
    auth_parser.set_defaults(func=handle_auth)

    refresh_parser = subparsers.add_parser("refresh", help="Runs the auth script of the active profile")
    refresh_parser.set_defaults(func=handle_refresh)

    completion_parser = subparsers.add_parser("completion", help="Prints a shell completion script")
    completion_parser.add_argument("--shell", "-s", required=True, choices=SUPPORTED_SHELLS)
    completion_parser.set_defaults(func=handle_completion)

    whoami_parser = subparsers.add_parser("whoami", help="Shows the caller identity of a profile")
    whoami_parser.add_argument("--profile", "-p", help="Profile name (uses default if not specified)")
    whoami_parser.set_defaults(func=handle_whoami)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        args.func(args)
    except CTXError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        if e.__cause__ is not None:
            logger.debug("caused error: %r", e.__cause__)
        return 1
    except (Exception, KeyboardInterrupt) as e:
        print(f"❌ {UnexpectedError().message}", file=sys.stderr)
        logger.debug("caused error: %r", e, exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
