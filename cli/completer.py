"""Custom completer for the couchrep console."""

from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, DIRECTIONS, HOST_ROLES, REPLICATE_FLAGS


class CouchrepCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Direction and flag completion for the 'replicate' command
    - Host role completion for the 'databases' command
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_words(COMMANDS, tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]
        position = len(tokens) if is_typing_new_token else len(tokens) - 1

        if command == "replicate":
            if position == 1:
                yield from self._complete_words(DIRECTIONS, current_word)
            else:
                already_typed = set(tokens[2:])
                if not is_typing_new_token:
                    already_typed.discard(current_word)
                candidates = [f for f in REPLICATE_FLAGS if f not in already_typed]
                yield from self._complete_words(candidates, current_word)
        elif command == "databases" and position == 1:
            yield from self._complete_words(HOST_ROLES, current_word)

    def _complete_words(self, words: list[str], partial: str) -> Iterable[Completion]:
        """Complete words matching the partial input."""
        partial_lower = partial.lower()
        for word in words:
            if word.startswith(partial_lower):
                yield Completion(word, start_position=-len(partial))
