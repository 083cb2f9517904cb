"""ContextVar-based lexer configuration for ConfigNeat.

Provides thread-local configuration using Python's ContextVars (PEP 567).
``next_token`` reads the active config on every call; the batch and
incremental drivers resolve it once when they are created.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from configneat.config import ErrorPolicy, LexerConfig, lexer_config_context

    with lexer_config_context(LexerConfig(error_policy=ErrorPolicy.RESYNC)):
        tag = next_token(stream, state)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum

# Boolean literal spellings, matched case-insensitively.
# Order matters: alternatives are tried first to last ("YES" before "Y").
TRUTHY_LITERALS: tuple[str, ...] = ("YES", "Y", "ON", "TRUE", "1")
FALSY_LITERALS: tuple[str, ...] = ("NO", "N", "OFF", "FALSE", "0")


class ErrorPolicy(Enum):
    """What the lexer does on an unbalanced ``}``.

    - STICKY: Record the error and tag everything after it ERROR
    - RESYNC: Record the error, tag the brace ERROR, keep lexing
    - RAISE: Record the error and raise it from next_token

    """

    STICKY = "sticky"
    RESYNC = "resync"
    RAISE = "raise"


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Immutable lexer configuration.

    Attributes:
        error_policy: Handling of unbalanced closing braces
        truthy_literals: Spellings classified BUILTIN as true values
        falsy_literals: Spellings classified BUILTIN as false values

    """

    error_policy: ErrorPolicy = ErrorPolicy.STICKY
    truthy_literals: tuple[str, ...] = TRUTHY_LITERALS
    falsy_literals: tuple[str, ...] = FALSY_LITERALS

    @classmethod
    def from_dict(cls, config_dict: dict) -> "LexerConfig":
        """Create LexerConfig from dictionary.

        Unknown keys are silently ignored. ``error_policy`` may be given
        by name ("resync", "STICKY"); literal lists become tuples.

        Args:
            config_dict: Dictionary with config values. Keys should match
                LexerConfig attribute names.

        Returns:
            New LexerConfig instance with values from dict.

        Raises:
            ValueError: If error_policy names no known policy.

        Example:
            >>> config = LexerConfig.from_dict({
            ...     "error_policy": "resync",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.error_policy
            <ErrorPolicy.RESYNC: 'resync'>

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        policy = filtered.get("error_policy")
        if isinstance(policy, str):
            try:
                filtered["error_policy"] = ErrorPolicy[policy.upper()]
            except KeyError:
                raise ValueError(f"Unknown error policy: {policy!r}") from None

        for name in ("truthy_literals", "falsy_literals"):
            if name in filtered:
                filtered[name] = tuple(str(literal).upper() for literal in filtered[name])

        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexerConfig = LexerConfig()

_lexer_config: ContextVar[LexerConfig] = ContextVar(
    "lexer_config",
    default=_DEFAULT_CONFIG,
)


def get_lexer_config() -> LexerConfig:
    """Get current lexer configuration (thread-local)."""
    return _lexer_config.get()


def set_lexer_config(config: LexerConfig) -> None:
    """Set lexer configuration for current context.

    Only affects the current thread's context.
    """
    _lexer_config.set(config)


def reset_lexer_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _lexer_config.set(_DEFAULT_CONFIG)


@contextmanager
def lexer_config_context(config: LexerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: LexerConfig to use within the context.

    Example:
        >>> with lexer_config_context(LexerConfig(error_policy=ErrorPolicy.RESYNC)):
        ...     get_lexer_config().error_policy
        <ErrorPolicy.RESYNC: 'resync'>

    Restores the previous config even if an exception is raised.
    """
    previous = _lexer_config.get()
    _lexer_config.set(config)
    try:
        yield
    finally:
        _lexer_config.set(previous)


__all__ = [
    "ErrorPolicy",
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
]
