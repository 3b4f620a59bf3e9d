"""Operator output port."""

from abc import ABC, abstractmethod


class OutputPort(ABC):
    """Sink for operator-facing messages, one line per message."""

    @abstractmethod
    def output(self, message: str) -> None:
        """Surface a message to the operator."""
