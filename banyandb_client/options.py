"""Connection options for BanyanDBClient."""

import os
from dataclasses import dataclass

from .errors import InvalidArgumentError

DEFAULT_DEADLINE = 30
DEFAULT_MAX_INBOUND_MESSAGE_SIZE = 50 * 1024 * 1024
DEFAULT_CONNECT_TIMEOUT = 10

ENV_DEADLINE = "BANYANDB_DEADLINE"
ENV_MAX_INBOUND_MESSAGE_SIZE = "BANYANDB_MAX_INBOUND_MESSAGE_SIZE"
ENV_CONNECT_TIMEOUT = "BANYANDB_CONNECT_TIMEOUT"


@dataclass(frozen=True)
class Options:
    """Per-client connection settings.

    The server imposes no deadline of its own. ``deadline`` defaults to
    DEFAULT_DEADLINE (30s) and every query carries it.

    Attributes:
        deadline: Seconds a single query or write stream may take.
        max_inbound_message_size: Largest response, in bytes, the channel accepts.
        connect_timeout: Seconds connect() waits for the channel to become ready.
    """

    deadline: float = DEFAULT_DEADLINE
    max_inbound_message_size: int = DEFAULT_MAX_INBOUND_MESSAGE_SIZE
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    def __post_init__(self) -> None:
        if self.deadline <= 0:
            raise InvalidArgumentError(f"deadline must be positive, got {self.deadline}")
        if self.max_inbound_message_size <= 0:
            raise InvalidArgumentError(
                f"max_inbound_message_size must be positive, got {self.max_inbound_message_size}"
            )
        if self.connect_timeout <= 0:
            raise InvalidArgumentError(
                f"connect_timeout must be positive, got {self.connect_timeout}"
            )

    @classmethod
    def from_env(cls) -> "Options":
        """Read options from the environment, falling back to defaults."""
        return cls(
            deadline=_env_number(ENV_DEADLINE, DEFAULT_DEADLINE, float),
            max_inbound_message_size=_env_number(
                ENV_MAX_INBOUND_MESSAGE_SIZE, DEFAULT_MAX_INBOUND_MESSAGE_SIZE, int
            ),
            connect_timeout=_env_number(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT, float),
        )

    def channel_options(self) -> list[tuple[str, int]]:
        """gRPC channel arguments derived from these options."""
        return [("grpc.max_receive_message_length", self.max_inbound_message_size)]


def _env_number(name: str, default, convert):
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return convert(raw)
    except ValueError as e:
        raise InvalidArgumentError(f"{name}={raw!r} is not a number") from e
