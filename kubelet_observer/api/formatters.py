from kubelet_observer.core.abstract.formatters import find, is_rich, list_available, register

__all__ = ["register", "find", "list_available", "is_rich"]
