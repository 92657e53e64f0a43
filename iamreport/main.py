from typing import Dict, List, Optional
import argparse
import logging

from .config import ReportConfig
from .usage import load_yaml_config, parse_cli_args, merge_configs
from .aws.sessions import create_session, create_iam_client
from .errors import ConfigError
from .report import run_report
from .output import OutputHandler

logger = logging.getLogger(__name__)


def setup_configuration(cli_args: argparse.Namespace, yaml_config: Dict) -> ReportConfig:
    """
    Merge and validate configuration from YAML and CLI arguments.

    Args:
        cli_args: Parsed command line arguments
        yaml_config: Configuration loaded from YAML file

    Returns:
        Validated ReportConfig object

    Raises:
        SystemExit: If configuration validation fails
    """
    try:
        final_config = merge_configs(yaml_config, cli_args)
    except (ValueError, TypeError) as e:
        OutputHandler.error("Configuration Error", e)
        exit(1)

    return final_config


def report_config_error(error: ConfigError) -> None:
    """Print the guidance shown when AWS credentials or configuration can't be resolved."""
    print("Couldn't load default configuration. Have you set up your AWS account?")
    print(error)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the iamreport tool."""
    cli_args = parse_cli_args(argv)
    yaml_config = load_yaml_config(cli_args.config)

    final_config = setup_configuration(cli_args, yaml_config)
    logging.basicConfig(level=final_config.log_level)

    try:
        session = create_session(final_config.profile_name, final_config.region_name)
        iam_client = create_iam_client(session)
        succeeded = run_report(iam_client, final_config)
    except ConfigError as e:
        report_config_error(e)
        logger.debug(f"Configuration resolution failed: {e}", exc_info=True)
        succeeded = False

    if not succeeded and final_config.exit_on_error:
        exit(1)


if __name__ == "__main__":
    main()
