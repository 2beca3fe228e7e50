from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from kubelet_observer.core.models.result import Result

# Renders the instances of one discovery cycle. A rich formatter returns a renderable instead of a string.
FormatterFunc = Callable[["Result"], Any]

FORMATTERS_REGISTRY: dict[str, FormatterFunc] = {}


def register(
    display_name: Optional[str] = None, *, rich_console: bool = False
) -> Callable[[FormatterFunc], FormatterFunc]:
    """
    Register a function that renders discovered service instances, so it can be picked with `--formatter`.

    Args:
        display_name: The name used on the command line. Defaults to the function name.
        rich_console: The function returns a rich renderable, which is printed through a rich console.

    Raises:
        ValueError: If another function is already registered under the same name.
    """

    def decorator(func: FormatterFunc) -> FormatterFunc:
        name = display_name or func.__name__

        registered = FORMATTERS_REGISTRY.get(name)
        if registered is not None and registered is not func:
            raise ValueError(f"An instance formatter named '{name}' is already registered")

        FORMATTERS_REGISTRY[name] = func
        func.__display_name__ = name  # type: ignore
        func.__rich_console__ = rich_console  # type: ignore
        return func

    return decorator


def is_rich(formatter: FormatterFunc) -> bool:
    return getattr(formatter, "__rich_console__", False)


def find(name: str) -> FormatterFunc:
    try:
        return FORMATTERS_REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown instance formatter '{name}', available formatters are: {', '.join(list_available())}"
        ) from None


def list_available() -> list[str]:
    return sorted(FORMATTERS_REGISTRY)


__all__ = ["register", "find", "list_available", "is_rich"]
