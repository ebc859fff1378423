#!/usr/bin/env python3
"""
setup-kubesolo - install KubeSolo on a CI runner and put the runner back afterwards
Runs as the main step of the action (setup) and again after the job (post)
"""
import argparse
import logging
import os
import sys
from pathlib import Path
import yaml
from dependency_injector import containers, providers
from commands.cleanup import Cleanup
from commands.post import Post
from commands.setup import Setup
from commands.status import Status
from libs.config import ActionConfig, InputsConfig, parse_bool
from libs.logger import get_logger, init_logger
from services.local import LocalService
from services.state import make_state_store

SCRIPT_DIR = Path(__file__).parent.absolute()
DEFAULT_CONFIG_FILE = SCRIPT_DIR / "setup-kubesolo.yaml"
logger = get_logger(__name__)


class ConfigError(RuntimeError):
    """Raised when the configuration file or the inputs are invalid."""


def load_config(config_file: Path) -> dict:
    """Load configuration from YAML file as dictionary (a missing file means built-in defaults)"""
    if not config_file.exists():
        if config_file != DEFAULT_CONFIG_FILE:
            raise ConfigError(f"Configuration file {config_file} not found")
        logger.debug("No %s; using built-in defaults", config_file)
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as err:
        raise ConfigError(f"Error loading configuration: {err}") from err


def read_inputs(args, environ=None) -> InputsConfig:
    """Action inputs from the environment, then command-line overrides"""
    inputs = InputsConfig.from_env(environ)
    if getattr(args, "version", None):
        inputs.version = args.version
    if getattr(args, "timeout", None) is not None:
        inputs.timeout = args.timeout
    for attr in ("wait_for_ready", "dns_readiness", "cleanup"):
        value = getattr(args, attr, None)
        if value is not None:
            setattr(inputs, attr, parse_bool(attr.replace("_", "-"), value))
    if getattr(args, "local_storage_shared_path", None):
        inputs.local_storage_shared_path = args.local_storage_shared_path
    return inputs


def get_config(args) -> ActionConfig:
    """Get configuration and return as ActionConfig instance"""
    config_file = Path(args.config).resolve() if args.config else DEFAULT_CONFIG_FILE
    try:
        inputs = read_inputs(args)
        return ActionConfig.from_dict(load_config(config_file), inputs=inputs, verbose=args.verbose)
    except (ValueError, TypeError) as err:
        raise ConfigError(str(err)) from err


def build_container(args) -> containers.DynamicContainer:
    """DI container wiring config, executor, handoff state and command classes"""
    di = containers.DynamicContainer()
    di.config = providers.Singleton(get_config, args)
    di.executor = providers.Singleton(LocalService.from_config, di.config)
    di.state = providers.Singleton(make_state_store, di.config, os.environ)
    for name, command_class in (("setup", Setup), ("post", Post), ("cleanup", Cleanup), ("status", Status)):
        setattr(di, name, providers.Factory(command_class, cfg=di.config, executor=di.executor, state=di.state))
    return di


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Install KubeSolo on a CI runner and restore the runner afterwards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every executed command and its output")
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML configuration file (default: setup-kubesolo.yaml)")
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    setup_parser = subparsers.add_parser("setup", help="Install KubeSolo and wait until the node is Ready")
    setup_parser.add_argument("--version", type=str, default=None, help="KubeSolo release tag or 'latest'")
    setup_parser.add_argument("--timeout", type=int, default=None, help="Readiness timeout in seconds")
    setup_parser.add_argument("--wait-for-ready", type=str, default=None, help="true/false")
    setup_parser.add_argument("--dns-readiness", type=str, default=None, help="true/false")
    setup_parser.add_argument("--local-storage-shared-path", type=str, default=None, help="Shared path for local storage")

    post_parser = subparsers.add_parser("post", help="Undo setup if it ran in this job")
    post_parser.add_argument("--cleanup", type=str, default=None, help="true/false")

    subparsers.add_parser("cleanup", help="Remove KubeSolo and restore container runtimes unconditionally")
    subparsers.add_parser("status", help="Show KubeSolo service state and what cleanup would restore")
    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    log_level = logging.DEBUG if args.verbose else logging.INFO
    init_logger(level=log_level, log_file=args.log_file)
    if args.command not in ("setup", "post", "cleanup", "status"):
        parser.print_help()
        return
    di = build_container(args)
    try:
        command = getattr(di, args.command)()
    except ConfigError as err:
        logger.error("%s", err)
        # The post step must never fail the job
        if args.command in ("post", "cleanup"):
            return
        sys.exit(1)
    command.run(args)


if __name__ == "__main__":
    main()
