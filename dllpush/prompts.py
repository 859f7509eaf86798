"""Interactive prompts and path autocomplete for the push wizard.

The wizard asks for folders and project names by letting the user type a
fragment and pick from ranked matches. Candidates come from a traversal of
the working directory, served through a :class:`ResultCache` owned by the
:class:`PathSuggester` so each new fragment does not re-walk the tree.
"""

import difflib
import logging
from typing import Callable, List, Optional, Sequence

import click

from .api import is_empty
from .config import TraversalOptions
from .core.cache import ResultCache

logger = logging.getLogger(__name__)

SOMETHING_ELSE = "Something else.."
A_NEW_ONE = "A new one.."
A_NEW_KEY = "A new key.."

# Matches scoring below this are dropped from suggestions
FUZZY_THRESHOLD = 0.6

Validator = Callable[[str], Optional[str]]


def _is_subsequence(needle: str, haystack: str) -> bool:
    it = iter(haystack)
    return all(char in it for char in needle)


def _score(query: str, candidate: str) -> float:
    """Similarity of ``candidate`` to ``query`` in [0, 1]; higher is better."""
    query = query.lower()
    text = candidate.lower()
    if query == text:
        return 1.0
    ratio = difflib.SequenceMatcher(None, query, text).ratio()
    if query in text:
        # Substring hits outrank everything else, earlier hits first
        return 0.9 + 0.05 * ratio + 0.04 * (1 - text.index(query) / len(text))
    if _is_subsequence(query, text):
        return 0.6 + 0.3 * ratio
    return ratio


def fuzzy_search(query: str, candidates: Sequence[str],
                 threshold: float = FUZZY_THRESHOLD,
                 limit: Optional[int] = None) -> List[str]:
    """Rank ``candidates`` against a typed fragment.

    Args:
        query: What the user typed
        candidates: Strings to choose from
        threshold: Minimum score for a candidate to be kept
        limit: Maximum number of results (None = all)

    Returns:
        Matching candidates, best first; empty for a blank query
    """
    if is_empty(query):
        return []

    query = query.strip()
    scored = []
    for index, candidate in enumerate(candidates):
        score = _score(query, candidate)
        if score >= threshold:
            scored.append((-score, index, candidate))

    scored.sort()
    matches = [candidate for _, _, candidate in scored]
    # Duplicates arise with base names of different folders
    matches = list(dict.fromkeys(matches))
    return matches if limit is None else matches[:limit]


class PathSuggester:
    """Autocomplete source over the folders of one working directory.

    Owns the result cache for its session: every keystroke against the
    same root is answered from the last traversal.
    """

    def __init__(self, cwd: str, cache: Optional[ResultCache] = None, limit: int = 10):
        self.cwd = cwd
        self.cache = cache or ResultCache()
        self.limit = limit

    def candidates(self, options: Optional[TraversalOptions] = None) -> List[str]:
        return self.cache.get_or_compute(self.cwd, options)

    def search(self, query: str, options: Optional[TraversalOptions] = None) -> List[str]:
        """Suggestions for ``query``; a blank query suggests nothing."""
        if is_empty(query):
            return []
        return fuzzy_search(query, self.candidates(options), limit=self.limit)


# ---------------------------------------------------------------------------
# click-based question helpers
# ---------------------------------------------------------------------------

def ask_text(message: str, default: Optional[str] = None,
             validate: Optional[Validator] = None) -> str:
    """Prompt until the answer passes ``validate``."""
    while True:
        value = click.prompt(message, default=default, show_default=default is not None)
        error = validate(value) if validate else None
        if error is None:
            return value
        click.secho(error, fg="yellow", err=True)


def ask_confirm(message: str, default: bool = False) -> bool:
    return click.confirm(message, default=default)


def ask_choice(message: str, choices: Sequence[str], default: Optional[str] = None) -> str:
    """Show a numbered list and return the picked entry."""
    if not choices:
        raise click.ClickException(f"No options available for: {message}")

    click.echo(message)
    for number, choice in enumerate(choices, start=1):
        click.echo(f"  {number}) {choice}")

    default_number = choices.index(default) + 1 if default in choices else 1
    picked = click.prompt("Choose", type=click.IntRange(1, len(choices)),
                          default=default_number)
    return choices[picked - 1]


def ask_autocomplete(message: str, suggest: Callable[[str], List[str]],
                     extra_choices: Sequence[str] = (),
                     empty_text: str = "Searching for options as you type") -> str:
    """Narrow suggestions by a typed fragment, then pick one.

    A fragment with no matches asks again; ``extra_choices`` are always
    offered after the matches.
    """
    while True:
        query = click.prompt(f"{message} ({empty_text})", default="", show_default=False)
        matches = suggest(query)
        choices = list(matches) + [c for c in extra_choices if c not in matches]
        if not choices:
            click.secho("No matches, try another search", fg="yellow", err=True)
            continue
        return ask_choice(message, choices)


def ask_loop(should_loop_message: str, questions: Callable[[], dict]) -> List[dict]:
    """Repeat ``questions`` for as long as the user wants more.

    Returns:
        One answers dict per accepted iteration
    """
    answers = []
    while ask_confirm(should_loop_message, default=False):
        answers.append(questions())
    return answers
