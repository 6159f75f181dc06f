# slurp/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
import structlog

from slurp import __version__ as app_version
from slurp.config.loader import build_config, load_and_merge_configs
from slurp.config.settings import SlurpConfig
from slurp.core.loader import Slurp
from slurp.exceptions import SlurpError
from slurp.logging_setup import configure_logging, level_for_verbosity

log = structlog.get_logger(__name__)

def _print_summary(loader: Slurp, dump_path: Optional[Path]):
    console = RichConsole(stderr=True, highlight=False, soft_wrap=True)
    console.print("[cyan]--- slurp summary ---[/cyan]")
    console.print(f"Base directory: {loader.base_dir}")
    console.print(f"Files loaded: [bold]{len(loader.get_files())}[/bold]")
    excluded = loader.get_excluded()
    console.print(f"Excluded names: {', '.join(excluded) if excluded else '(none)'}")
    if dump_path is not None:
        console.print(f"Loaded-files dump written to: {dump_path}")

def _run_slurp_flow(config: SlurpConfig) -> Tuple[Slurp, Optional[Path]]:
    log.info("slurp_run_started", base_dir=str(config.base_dir), targets=config.targets)
    loader = Slurp(
        config.base_dir,
        excluded=config.excluded,
        extension=config.extension,
        follow_symlinks=config.follow_symlinks,
    )
    if config.add_excluded:
        loader.add_exclusion(config.add_excluded)
    for root in config.allowed_roots:
        loader.add_allowed_root(root)
    for entry in config.whitelist:
        loader.add_to_whitelist(entry)

    loader.include(config.targets or None, config.recursive)

    dump_path = None
    if config.dump_file is not None:
        dump_path = loader.dump_files(config.dump_file)
    return loader, dump_path


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("base_dir", type=click.Path(path_type=Path))
@click.argument("targets", nargs=-1)
@optgroup.group("Traversal Options", help="Which directories and files are scanned.")
@optgroup.option("-r", "--recursive", "recursive", is_flag=True, default=False, help="Descend into subdirectories of each target.")
@optgroup.option("--ext", "extension", default=None, help="Source file extension to load. Default: .py.")
@optgroup.option("-L", "--follow-symlinks", "follow_symlinks", is_flag=True, default=False, help="Follow symlinked directories when recursing.")
@optgroup.group("Filtering Options", help="Which files are admitted.")
@optgroup.option("-x", "--exclude", "add_excluded", multiple=True, help="File name to never load (repeatable).")
@optgroup.option("--no-default-excludes", "no_default_excludes", is_flag=True, default=False, help="Do not exclude __init__.py by default.")
@optgroup.group("Containment Options", help="Restrict which directories may be scanned.")
@optgroup.option("--allow-root", "allowed_roots", multiple=True, type=click.Path(path_type=Path), help="Allowed root directory; targets outside it are an error.")
@optgroup.option("--whitelist", "whitelist", multiple=True, type=click.Path(path_type=Path), help="Whitelisted directory; targets outside it are skipped.")
@optgroup.group("Output Options", help="Debug output.")
@optgroup.option("--dump", "dump_file", default=None, metavar="NAME", help="Write the loaded-file list to NAME (.txt) in the base directory. An empty NAME picks a random one.")
@optgroup.option("--quiet", "-q", "quiet", is_flag=True, default=False, help="Do not print the summary on stderr.")
@optgroup.group("Application Behavior", help="Configuration profiles and logging.")
@optgroup.option("--config-profile", "config_profile", default=None, help="Load a profile from config file(s).")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, prog_name="slurp", help="Show version and exit.")
def main_cli(base_dir: Path, targets: Tuple[str, ...], **cli_params: Any):
    """slurp: load source files from TARGET directories below BASE_DIR.

    With no TARGET the base directory itself is scanned.
    """
    log_level = level_for_verbosity(cli_params.get("verbosity_level", 0))
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs", False))

    try:
        file_settings = load_and_merge_configs(base_dir)

        overrides: Dict[str, Any] = {
            "recursive": True if cli_params.get("recursive") else None,
            "extension": cli_params.get("extension"),
            "follow_symlinks": True if cli_params.get("follow_symlinks") else None,
            "dump_file": cli_params.get("dump_file"),
            "targets": list(targets) if targets else None,
            "add_excluded": list(cli_params["add_excluded"]) if cli_params.get("add_excluded") else None,
            "allowed_roots": list(cli_params["allowed_roots"]) if cli_params.get("allowed_roots") else None,
            "whitelist": list(cli_params["whitelist"]) if cli_params.get("whitelist") else None,
        }
        if cli_params.get("no_default_excludes"):
            overrides["excluded"] = []

        config = build_config(base_dir, file_settings, cli_params.get("config_profile"), overrides)
        loader, dump_path = _run_slurp_flow(config)

        for file_path in loader.get_files():
            click.echo(file_path)
        if not cli_params.get("quiet"):
            _print_summary(loader, dump_path)

    except SlurpError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)
