"""
Keybinding management.

Stores the mapping from the pager's built-in actions to key descriptors and
supports user overrides from the configuration file.
"""

from __future__ import annotations

from list_pager.keys import Key

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

UP = "up"
DOWN = "down"
EXIT = "exit"

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    UP: ["up"],
    DOWN: ["down"],
    EXIT: ["ctrl+c"],
}


def normalise_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to the form of
    :attr:`Key.descriptor`.

    ``"Shift+Ctrl+C"`` -> ``"ctrl+shift+c"``
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    modifiers = sorted(p for p in parts[:-1])
    base = parts[-1] if parts else ""
    return "+".join(modifiers + [base])


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------


class KeybindingsManager:
    """
    Maps action names to key descriptors.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to descriptor lists that replace the
        defaults for those actions.  Unknown action names are kept so that
        :meth:`find_action` can report them, but the pager only acts on
        ``up``, ``down`` and ``exit``.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        # Pre-normalise all descriptors for fast matching
        self._normalised: dict[str, list[str]] = {
            action: [normalise_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    def matches(self, key: Key | str, action: str) -> bool:
        """Test whether *key* matches any binding for *action*."""
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False

        if isinstance(key, str):
            normalised = normalise_descriptor(key)
        else:
            normalised = key.descriptor

        return normalised in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Return the descriptors bound to *action* in their original form."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        """Return all registered action names."""
        return list(self._bindings.keys())

    def find_action(self, key: Key | str) -> str | None:
        """
        Find the first action that matches *key*, or ``None``.

        Actions are checked in insertion order.
        """
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None
