from dataclasses import replace
from functools import cache

import click

from openspec.cli.output import machine_output, user_output
from openspec.core.context import OpenSpecContext
from openspec.core.errors import ValidationError
from openspec.core.global_config import GlobalConfig
from openspec.core.profiles import (
    ALL_WORKFLOWS,
    DEFAULT_DELIVERY,
    DEFAULT_PROFILE,
    DELIVERIES,
    PROFILES,
    is_workflow_id,
)

FEATURE_FLAG_PREFIX = "feature_flags."


@cache
def get_global_config_keys() -> dict[str, str]:
    """Get user-exposed global config keys with descriptions.

    Order determines display order in 'openspec config list'.
    """
    return {
        "profile": f"Workflow profile ({', '.join(PROFILES)})",
        "delivery": f"Artifact kinds to generate ({', '.join(DELIVERIES)})",
        "workflows": "Comma-separated workflows for the custom profile",
    }


def _format_config_value(value: object) -> str:
    """Format a config value for display."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, tuple):
        return ",".join(str(v) for v in value)
    return str(value)


def _parse_bool(value: str) -> bool:
    if value.lower() not in ("true", "false"):
        raise ValidationError(f"Invalid boolean value: {value}")
    return value.lower() == "true"


def _parse_workflows(value: str) -> tuple[str, ...]:
    tokens = [token.strip() for token in value.split(",") if token.strip()]
    invalid = [token for token in tokens if not is_workflow_id(token)]
    if invalid:
        raise ValidationError(
            f"Invalid workflow(s): {', '.join(invalid)}. "
            f"Available workflows: {', '.join(ALL_WORKFLOWS)}"
        )
    return tuple(dict.fromkeys(tokens))


def _flag_name(key: str) -> str:
    name = key[len(FEATURE_FLAG_PREFIX) :]
    if not name:
        raise ValidationError(f"Invalid key: {key}")
    return name


def _apply_set(config: GlobalConfig, key: str, value: str) -> GlobalConfig:
    if key == "profile":
        if value not in PROFILES:
            raise ValidationError(
                f'Invalid profile "{value}". Available profiles: {", ".join(PROFILES)}'
            )
        return replace(config, profile=value)
    if key == "delivery":
        if value not in DELIVERIES:
            raise ValidationError(
                f'Invalid delivery "{value}". Available values: {", ".join(DELIVERIES)}'
            )
        return replace(config, delivery=value)
    if key == "workflows":
        return replace(config, workflows=_parse_workflows(value))
    if key.startswith(FEATURE_FLAG_PREFIX):
        flags = dict(config.feature_flags)
        flags[_flag_name(key)] = _parse_bool(value)
        return replace(config, feature_flags=flags)
    raise ValidationError(f"Invalid key: {key}")


def _apply_unset(config: GlobalConfig, key: str) -> GlobalConfig:
    if key == "profile":
        return replace(config, profile=None)
    if key == "delivery":
        return replace(config, delivery=DEFAULT_DELIVERY)
    if key == "workflows":
        return replace(config, workflows=None)
    if key.startswith(FEATURE_FLAG_PREFIX):
        flags = dict(config.feature_flags)
        flags.pop(_flag_name(key), None)
        return replace(config, feature_flags=flags)
    raise ValidationError(f"Invalid key: {key}")


@click.group("config")
def config_group() -> None:
    """Manage global openspec configuration."""


@config_group.command("keys")
def config_keys() -> None:
    """List all available configuration keys with descriptions."""
    formatter = click.HelpFormatter()
    rows = list(get_global_config_keys().items())
    rows.append((f"{FEATURE_FLAG_PREFIX}<name>", "Named boolean toggle (true or false)"))

    user_output(click.style("Global configuration keys:", bold=True))
    formatter.write_dl(rows)
    user_output(formatter.getvalue().rstrip())


@config_group.command("path")
@click.pass_obj
def config_path(ctx: OpenSpecContext) -> None:
    """Print the location of the global config file."""
    machine_output(str(ctx.config_store.config_path()))


@config_group.command("list")
@click.pass_obj
def config_list(ctx: OpenSpecContext) -> None:
    """Print a list of configuration keys and values."""
    user_output(click.style("Global configuration:", bold=True))
    if not ctx.config_store.exists():
        user_output(f"  (not configured - defaults apply, profile={DEFAULT_PROFILE})")
        return

    config = ctx.config_store.read()
    if config.profile is None:
        user_output(f"  profile={DEFAULT_PROFILE} (default)")
    else:
        user_output(f"  profile={config.profile}")
    user_output(f"  delivery={config.delivery}")
    if config.workflows is not None:
        user_output(f"  workflows={_format_config_value(config.workflows)}")
    for name, enabled in config.feature_flags.items():
        user_output(f"  {FEATURE_FLAG_PREFIX}{name}={_format_config_value(enabled)}")


@config_group.command("get")
@click.argument("key", metavar="KEY")
@click.pass_obj
def config_get(ctx: OpenSpecContext, key: str) -> None:
    """Print the value of a given configuration key."""
    config = ctx.config_store.read()

    if key == "profile":
        machine_output(config.profile if config.profile is not None else DEFAULT_PROFILE)
        return
    if key == "delivery":
        machine_output(config.delivery)
        return
    if key == "workflows":
        if config.workflows is None:
            raise ValidationError(f"Key not found: {key}")
        machine_output(_format_config_value(config.workflows))
        return
    if key.startswith(FEATURE_FLAG_PREFIX):
        name = _flag_name(key)
        if name not in config.feature_flags:
            raise ValidationError(f"Key not found: {key}")
        machine_output(_format_config_value(config.feature_flags[name]))
        return

    raise ValidationError(f"Invalid key: {key}")


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.pass_obj
def config_set(ctx: OpenSpecContext, key: str, value: str) -> None:
    """Update configuration with a value for the given key."""
    new_config = _apply_set(ctx.config_store.read(), key, value)
    ctx.config_store.write(new_config)
    user_output(f"Set {key}={value}")
    user_output(click.style("Run 'openspec update' to apply the change to this project.", dim=True))


@config_group.command("unset")
@click.argument("key", metavar="KEY")
@click.pass_obj
def config_unset(ctx: OpenSpecContext, key: str) -> None:
    """Remove a configuration key, restoring its default."""
    new_config = _apply_unset(ctx.config_store.read(), key)
    ctx.config_store.write(new_config)
    user_output(f"Unset {key}")


@config_group.command("reset")
@click.option("-y", "--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def config_reset(ctx: OpenSpecContext, yes: bool) -> None:
    """Reset global configuration to the core profile with default delivery."""
    if not yes:
        if not ctx.console.is_stdin_interactive():
            raise ValidationError("Refusing to reset without confirmation. Pass --yes.")
        if not ctx.console.confirm("Reset global configuration to defaults?", default=False):
            user_output("Reset cancelled.")
            return

    ctx.config_store.write(
        GlobalConfig(profile=DEFAULT_PROFILE, delivery=DEFAULT_DELIVERY, workflows=None)
    )
    user_output(f"Reset global configuration at {ctx.config_store.config_path()}")
