"""Protocolos (contratos) entre o executor e a infraestrutura."""

from .transport import HttpTransportProtocol, RawResponse

__all__ = ["HttpTransportProtocol", "RawResponse"]
