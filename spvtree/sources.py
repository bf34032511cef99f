"""
Leaf producers.

Anything that can hand over an address as raw bytes (for example a wallet
exposing a public-key hash) can feed a tree. Key generation, address
encoding and wallet storage live with the producer, not here.
"""
from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class AddressSource(Protocol):
    """Producer interface: returns the address payload as raw bytes."""

    def get_address_bytes(self) -> bytes:
        ...


def records_from_sources(sources: Iterable[AddressSource]) -> list[bytes]:
    """
    Collect address bytes from each source, preserving order.

    Raises:
        TypeError: If a source does not implement get_address_bytes(),
            or returns something other than bytes
    """
    records: list[bytes] = []
    for i, source in enumerate(sources):
        if not isinstance(source, AddressSource):
            raise TypeError(
                f"Source {i} ({type(source).__name__}) has no get_address_bytes()"
            )
        payload = source.get_address_bytes()
        if not isinstance(payload, (bytes, bytearray)):
            raise TypeError(
                f"Source {i} returned {type(payload).__name__}, expected bytes"
            )
        records.append(bytes(payload))
    return records


__all__ = [
    "AddressSource",
    "records_from_sources",
]
