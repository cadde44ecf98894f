"""Operator confirmation of destructive changes."""

import functools
import logging
from typing import Callable, Optional

import click

from ..output import OutputFormatter

logger = logging.getLogger(__name__)

CONFIRM_PROMPT = "Proceed with deletion? [y/N]"
AFFIRMATIVE_ANSWERS = ("y", "yes")

ConfirmFunc = Callable[[str], bool]


def prompt_confirmation(message: str, err: bool = False) -> bool:
    """Ask the operator a yes/no question on the terminal.

    Only ``y`` or ``yes`` (any case) counts as consent. An empty answer or an
    unreadable input stream counts as a refusal. Ctrl-C is not an answer and
    propagates as :class:`KeyboardInterrupt`.

    Args:
        message: Question to show
        err: Write the question to stderr instead of stdout
    """
    try:
        response = click.prompt(
            message, default="", show_default=False, prompt_suffix=" ", err=err
        )
    except click.Abort as e:
        # click reports both Ctrl-C and end of input as Abort
        if isinstance(e.__context__, KeyboardInterrupt):
            raise KeyboardInterrupt from e
        logger.debug("Confirmation input closed, treating as no")
        return False
    except OSError as e:
        logger.debug("Confirmation input unavailable, treating as no: %r", e)
        return False
    return is_affirmative(response)


def is_affirmative(response: Optional[str]) -> bool:
    """Check whether an answer grants consent.

    Examples:
        >>> is_affirmative(" YES ")
        True
        >>> is_affirmative("")
        False
    """
    if response is None:
        return False
    return response.strip().lower() in AFFIRMATIVE_ANSWERS


class DeletionNegotiator:
    """Decides whether a mirror pass may delete destination items."""

    def __init__(
        self,
        output: Optional[OutputFormatter] = None,
        confirm: Optional[ConfirmFunc] = None,
    ):
        """Initialize the negotiator.

        Args:
            output: Output formatter for listing the affected items
            confirm: Callable asking the operator a question and returning
                True on consent; defaults to an interactive terminal prompt,
                asked on stderr when stdout carries JSON
        """
        self.output = output or OutputFormatter()
        self.confirm = confirm or functools.partial(
            prompt_confirmation, err=self.output.json_output
        )

    def negotiate(
        self,
        planned_deletions: list[str],
        simulate_run: bool,
        force_delete: bool,
    ) -> bool:
        """Decide whether deletions are enabled for the commit pass.

        Args:
            planned_deletions: Destination items the pass would remove
            simulate_run: True for dry runs, which never enable deletions
            force_delete: Enable deletions without asking

        Returns:
            True if the commit pass may delete items
        """
        if not planned_deletions:
            return True

        if simulate_run:
            return False

        if force_delete:
            self.output.items(
                "Items to be deleted (--force enabled):", planned_deletions
            )
            return True

        self.output.items("Items to be deleted:", planned_deletions, always=True)
        try:
            accepted = bool(self.confirm(CONFIRM_PROMPT))
        except (EOFError, OSError, click.Abort) as e:
            logger.debug("Confirmation failed, treating as no: %r", e)
            accepted = False

        if not accepted:
            self.output.info("Deletions skipped by user")
        logger.debug(
            "Deletion of %d item(s) %s",
            len(planned_deletions),
            "accepted" if accepted else "declined",
        )
        return accepted
