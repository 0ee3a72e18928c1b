"""
cmdtable default tokenizer (the shell line parser the engine delegates to).

The engine only needs the primitives below; a host with its own shell parser
can pass any object providing the same `parse(entries, tokens)` method and
TokenSet surface.

Semantics
- tokens[0] is the program name; it is never a switch nor a counted positional.
- a token is switch-like when it starts with '-' and is longer than '-'.
- switch-like tokens must match a registered spelling (case-insensitively,
  as the shell does), otherwise UnknownSwitchError names the token.
- a VALUE entry takes the next token as its value unless that token is
  switch-like or missing, in which case it is recorded without a value.
- everything else is positional, in order of appearance.

TokenSet surface
- flag(spelling)    -> bool          spelling present
- value(spelling)   -> str | None    value of its first occurrence
- count             -> int           positionals, program name excluded
- raw(index)        -> str           positional by index, 0 is the program name
- duplicate()       -> str | None    first spelling supplied more than once
- release()                          drop the storage (idempotent)
"""
import difflib

from .faults import UnknownSwitchError
from .schema import Kind
from .utils import isswitch


class TokenSet:
    """
    Result of tokenizing one command line against one registration table.

    Usable as a context manager: leaving the block releases it, whatever the
    outcome. Reading a released set raises RuntimeError.
    """

    def __init__(self, positionals, switches, /):
        self._positionals = list(positionals)
        self._switches = list(switches)  # (registered name, typed token, value)
        self._released = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.release()

    def __repr__(self):
        state = "released" if self._released else "%d positionals, %d switches" % (
            len(self._positionals) - 1, len(self._switches)
        )
        return f"token-set({state})"

    def _storage(self):
        if self._released:
            raise RuntimeError("token set was released")
        return self._positionals, self._switches

    @property
    def released(self):
        return self._released

    @property
    def count(self):
        positionals, _ = self._storage()
        return max(len(positionals) - 1, 0)

    def raw(self, index, /):
        positionals, _ = self._storage()
        return positionals[index]

    def flag(self, spelling, /):
        _, switches = self._storage()
        return any(name == spelling for name, _, _ in switches)

    def value(self, spelling, /):
        _, switches = self._storage()
        for name, _, value in switches:
            if name == spelling:
                return value
        return None

    def duplicate(self):
        _, switches = self._storage()
        seen = set()
        for name, token, _ in switches:
            if name in seen:
                return token
            seen.add(name)
        return None

    def release(self):
        if self._released:
            return
        self._positionals.clear()
        self._switches.clear()
        self._released = True


class Tokenizer:
    """
    Default shell-style tokenizer.

    Stateless: each parse() call gets the registration table it should honor.
    """

    def parse(self, entries, tokens, /):
        """
        Tokenize `tokens` (program name first) against registration `entries`.

        Raises
        - UnknownSwitchError: a switch-like token matches no registered spelling.
        """
        registry = {}
        for entry in entries:
            registry.setdefault(entry.name.lower(), entry)

        tokens = list(tokens)
        positionals = [tokens[0] if tokens else ""]
        switches = []

        index = 1
        while index < len(tokens):
            token = tokens[index]
            index += 1

            if not isswitch(token):
                positionals.append(token)
                continue

            try:
                entry = registry[token.lower()]
            except KeyError:
                suggestions = difflib.get_close_matches(token, [entry.name for entry in registry.values()], 1)
                if suggestions:
                    hint = "did you mean %r?" % suggestions[0]
                elif "-help" in registry:
                    hint = "use -help to list the options"
                else:
                    hint = None
                raise UnknownSwitchError(
                    "Unknown option - '%s'" % token,
                    title="unknown option",
                    token=token,
                    hint=hint,
                ) from None

            value = None
            if entry.kind is Kind.VALUE and index < len(tokens) and not isswitch(tokens[index]):
                value = tokens[index]
                index += 1
            switches.append((entry.name, token, value))

        return TokenSet(positionals, switches)


__all__ = (
    "TokenSet",
    "Tokenizer",
)
