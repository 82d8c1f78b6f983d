"""Registry for dynamically registering and retrieving text sources and sinks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from pdfreflow.sinks.base import BaseDocumentSink
    from pdfreflow.sources.base import BasePageTextSource


T = TypeVar("T")


class _Registry(Generic[T]):
    """Backend classes of one kind, looked up by the name used in ``LayoutConfig``."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._backends: dict[str, type[T]] = {}

    def register(self, name: str, cls: type[T]) -> None:
        current = self._backends.get(name)
        if current is not None and current is not cls:
            raise ValueError(f"{self.kind} '{name}' is already registered to {current.__name__}")
        self._backends[name] = cls

    def get(self, name: str) -> type[T]:
        try:
            return self._backends[name]
        except KeyError:
            available = ", ".join(sorted(self._backends)) or "none"
            raise KeyError(f"Unknown {self.kind} '{name}'. Available: {available}") from None

    def create(self, name: str, **kwargs) -> T:
        """Instantiate the backend registered under ``name``."""
        return self.get(name)(**kwargs)

    def list(self) -> list[str]:
        return sorted(self._backends)

    def __contains__(self, name: str) -> bool:
        return name in self._backends


SourceRegistry: _Registry[BasePageTextSource] = _Registry("source")
SinkRegistry: _Registry[BaseDocumentSink] = _Registry("sink")
