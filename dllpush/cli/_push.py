"""The push wizard: collect configuration, then run the push script."""

import os

import click

from ..config import TraversalOptions
from ..prompts import (
    A_NEW_KEY,
    A_NEW_ONE,
    SOMETHING_ELSE,
    PathSuggester,
    ask_autocomplete,
    ask_choice,
    ask_confirm,
    ask_loop,
    ask_text,
)
from ..push import SCRIPT_ENV_VAR, PushError, PushRequest, PushRunner
from ..settings import (
    ADDITIONAL_KEY_NAME,
    API_ROOTS,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_KEY_NAME,
    DEV_API_ROOT,
    TEMPORARY_KEY_NAME,
    ApiKey,
    ProjectConfig,
    save_config,
    validate_api_key,
    validate_project_name,
)
from ._helpers import _cwd, _load_config_or_fail, _status, _task_reporter, main

API_KEY_HELP = "https://github.com/Digital-Law-Lab/Digital-Law-Lab/wiki/Setting-Up#docassemble-api-key"
CURRENT_FOLDER_PREFIX = "Current folder"


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

def _ask_api_key(default_name: str, with_name: bool = True) -> dict:
    """Ask for a key, its name and its API root."""
    key = ask_text(f"What is the API key? (see {API_KEY_HELP})", validate=validate_api_key)
    name = ask_text("What would you like to call this API key?",
                    default=default_name) if with_name else TEMPORARY_KEY_NAME
    root = ask_choice("What is the API endpoint url?", API_ROOTS, default=DEV_API_ROOT)
    return {"name": name, "key": ApiKey(key, root)}


def _ask_project_name(suggester: PathSuggester) -> str:
    """Fuzzy-pick a folder name as the project name, or type one."""
    options = TraversalOptions(base_name_only=True)
    while True:
        choice = ask_autocomplete(
            "What is the name of your DA playground project?",
            lambda query: suggester.search(query, options),
            extra_choices=[SOMETHING_ELSE],
        )
        if choice == SOMETHING_ELSE:
            return ask_text("Please type the name of your DA playground project:",
                            validate=validate_project_name)
        error = validate_project_name(choice)
        if error is None:
            return choice
        click.secho(error, fg="yellow", err=True)


def _create_config(cwd: str, suggester: PathSuggester):
    """Offer to create ``dll.config.json``; None if the user declines."""
    wanted = ask_confirm(
        f"We couldn't locate a {CONFIG_FILE_NAME} file for this project, "
        "would you like to create one?"
    )
    if not wanted:
        return None

    keys = [_ask_api_key(DEFAULT_KEY_NAME)]
    keys += ask_loop("Add another key?", lambda: _ask_api_key(ADDITIONAL_KEY_NAME))

    projects = [_ask_project_name(suggester)]
    projects += [answer["project"] for answer in ask_loop(
        "Add another playground project name?",
        lambda: {"project": _ask_project_name(suggester)},
    )]

    config = ProjectConfig(
        api_keys={answer["name"]: answer["key"] for answer in keys},
        playground_projects=list(dict.fromkeys(projects)),
    )

    click.echo("Your configuration file will be saved at "
               f"`{os.path.join('.', CONFIG_DIR_NAME, CONFIG_FILE_NAME)}`")
    try:
        save_config(config, cwd)
    except OSError as exc:
        click.echo(click.style("FAILED", fg="bright_red") + " to create config file")
        raise click.ClickException(str(exc))
    click.echo(click.style("CREATED", fg="blue") + f" {CONFIG_FILE_NAME} successfully")
    return config


def _choose_project(config, suggester: PathSuggester) -> str:
    if config is not None and config.playground_projects:
        choice = ask_choice("Which playground project do you want to push to?",
                            config.playground_projects + [A_NEW_ONE])
        if choice != A_NEW_ONE:
            return choice
    return _ask_project_name(suggester)


def _choose_key(config) -> tuple:
    """Return ``(key_name, ApiKey)``; freshly typed keys use a temporary name."""
    if config is not None:
        names = config.api_key_names
        if len(names) > 1:
            name = ask_choice("You have more than one API key in your config file, "
                              "which one would you like to use?", names + [A_NEW_KEY])
            if name != A_NEW_KEY:
                return name, config.api_keys[name]
        elif len(names) == 1:
            if ask_confirm(f"Do you want to use {click.style(names[0], fg='yellow')} "
                           "as your API key", default=True):
                return names[0], config.api_keys[names[0]]

    answer = _ask_api_key(TEMPORARY_KEY_NAME, with_name=False)
    return answer["name"], answer["key"]


def _resolve_folder_choice(cwd: str, choice: str) -> str:
    """Map a picked suggestion back to a filesystem path."""
    if choice.startswith(CURRENT_FOLDER_PREFIX):
        return cwd
    return os.path.join(cwd, choice)


def _choose_folder(cwd: str, suggester: PathSuggester) -> str:
    options = TraversalOptions(
        include_root_sentinel=True,
        root_sentinel_label=f"{CURRENT_FOLDER_PREFIX} [{cwd}]",
    )

    def suggest(query):
        if not query.strip():
            return suggester.candidates(options)
        return suggester.search(query, options)

    choice = ask_autocomplete("Which folder do you want to push to the playground?",
                              suggest, empty_text="type to filter, blank for all")
    return _resolve_folder_choice(cwd, choice)


# ---------------------------------------------------------------------------
# push
# ---------------------------------------------------------------------------

@main.command()
@click.option("--project", help="Playground project to push to.")
@click.option("--key-name", help="Name of a stored API key to use.")
@click.option("--folder", type=click.Path(exists=True, file_okay=False),
              help="Package folder to push.")
@click.option("--script", type=click.Path(), envvar=SCRIPT_ENV_VAR,
              help=f"Path to the playground manager script (or set {SCRIPT_ENV_VAR}).")
@click.option("--python", "python_bin", help="Python interpreter for the script.")
@click.pass_context
def push(ctx, project, key_name, folder, script, python_bin):
    """Push a local docassemble package to a playground project."""
    cwd = _cwd(ctx)
    config = _load_config_or_fail(cwd)
    # Separate suggesters: project names use base names, folders full paths
    name_suggester = PathSuggester(cwd)
    folder_suggester = PathSuggester(cwd)

    if config is None:
        config = _create_config(cwd, name_suggester)

    if project is not None:
        error = validate_project_name(project)
        if error:
            raise click.BadParameter(error, param_hint="'--project'")
    else:
        project = _choose_project(config, name_suggester)

    if key_name is not None:
        if config is None or key_name not in config.api_keys:
            raise click.BadParameter(f"No API key named '{key_name}' in {CONFIG_FILE_NAME}",
                                     param_hint="'--key-name'")
        key = config.api_keys[key_name]
    else:
        key_name, key = _choose_key(config)

    if folder is not None:
        folder = os.path.abspath(folder)
    else:
        folder = _choose_folder(cwd, folder_suggester)

    _status(ctx, f"Pushing {folder} to {project} using {key_name}")

    runner = PushRunner(python=python_bin, script_path=script, reporter=_task_reporter)
    try:
        outcome = runner.run(PushRequest(project=project, folder=folder,
                                         key_name=key_name, key=key, cwd=cwd))
    except PushError as exc:
        raise click.ClickException(str(exc))

    if outcome.debug_encountered:
        click.echo(_indent(outcome.debug_msg))
    elif outcome.warning_encountered:
        click.echo(_indent(outcome.warning_msg), err=True)


def _indent(text: str) -> str:
    return "\n".join(f"    {line}" for line in text.rstrip().splitlines())
