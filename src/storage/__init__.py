"""Persistence of game state in a key-value store."""

from .base import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    StorageError,
)
from .codec import (
    DecodeError,
    decode_players,
    decode_rounds,
    decode_rules,
    decode_stage,
    decode_started,
    encode_players,
    encode_rounds,
    encode_rules,
    encode_stage,
    encode_started,
)

__all__ = [
    # Base
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "StorageError",
    # Codec
    "DecodeError",
    "decode_players",
    "decode_rounds",
    "decode_rules",
    "decode_stage",
    "decode_started",
    "encode_players",
    "encode_rounds",
    "encode_rules",
    "encode_stage",
    "encode_started",
]
