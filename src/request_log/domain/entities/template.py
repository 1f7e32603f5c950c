from __future__ import annotations

from dataclasses import dataclass

from request_log.domain.value_objects.enums import StandardToken


@dataclass(frozen=True, slots=True)
class StandardTokenRef:
    kind: StandardToken


@dataclass(frozen=True, slots=True)
class CustomTokenRef:
    name: str


TokenRef = StandardTokenRef | CustomTokenRef


@dataclass(frozen=True, slots=True)
class TemplateProgram:
    """Compiled template: ``chunks`` always holds one more entry than ``tokens``."""

    chunks: tuple[str, ...]
    tokens: tuple[TokenRef, ...]

    def __post_init__(self) -> None:
        if len(self.chunks) != len(self.tokens) + 1:
            raise ValueError(
                f"expected {len(self.tokens) + 1} literal chunks, got {len(self.chunks)}"
            )

    @property
    def is_constant(self) -> bool:
        return not self.tokens
