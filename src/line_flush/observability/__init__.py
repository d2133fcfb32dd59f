from .domain.logging import LogMessage

__all__ = ["LogMessage"]
