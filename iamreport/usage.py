import argparse
import yaml
from typing import Any, Dict, List, Optional
from .config import ReportConfig


def load_yaml_config(path: Optional[str]) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file, or None to skip loading

    Returns:
        Dictionary containing the loaded configuration, or empty dict if there is none
    """
    if path is None:
        return {}
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"Config file '{path}' not found. Continuing without it.")
        return {}


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments for the iamreport tool.

    Args:
        argv: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed command line arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="iamreport",
        description="iamreport - print the IAM details of the current AWS user"
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to an optional config YAML'
    )

    # AWS resolution (overrides YAML if provided)
    parser.add_argument(
        '--profile',
        dest='profile_name',
        type=str,
        help='Named AWS profile to use (default: the standard credential chain)'
    )
    parser.add_argument(
        '--region',
        dest='region_name',
        type=str,
        help='AWS region for the session'
    )

    parser.add_argument(
        '--max-items',
        dest='max_items',
        type=int,
        help='Maximum number of groups and policies to list'
    )

    # Behaviour switches
    parser.add_argument(
        '--no-prompt',
        dest='prompt_for_policy_versions',
        action='store_false',
        default=argparse.SUPPRESS,
        help='Skip the interactive policy version prompt'
    )
    parser.add_argument(
        '--exit-on-error',
        dest='exit_on_error',
        action='store_true',
        default=argparse.SUPPRESS,
        help='Exit with status 1 when a query fails'
    )
    parser.add_argument(
        '--log-level',
        dest='log_level',
        type=str,
        help='Logging level for diagnostics written to stderr (default WARNING)'
    )

    return parser.parse_args(argv)


def merge_configs(yaml_config: Dict[str, Any], cli_args: argparse.Namespace) -> ReportConfig:
    """
    Merge YAML configuration with CLI arguments and validate the result.

    Args:
        yaml_config: Configuration loaded from YAML file
        cli_args: Parsed command line arguments

    Returns:
        Validated ReportConfig object

    Raises:
        ValueError: If a setting fails validation
        TypeError: If the YAML top level is not a mapping of settings
    """
    if not isinstance(yaml_config, dict):
        raise TypeError(
            f"config file must hold a mapping of settings, not {type(yaml_config).__name__}"
        )

    # Flags left unset on the command line keep the YAML value
    overrides = {
        name: value for name, value in vars(cli_args).items()
        if name in ReportConfig.model_fields and value is not None
    }
    return ReportConfig(**{**yaml_config, **overrides})
