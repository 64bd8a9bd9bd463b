from abc import ABC, abstractmethod
from typing import Optional

class StorageError(Exception):
    """Raised when the storage backend fails to read or write a slot."""
    pass

class KeyValueStorage(ABC):
    """
    Abstract string key/value storage.

    Mirrors the browser local-storage contract: one string value per key,
    no partial updates, last writer wins.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Slot name

        Returns:
            The stored string, None if the slot is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Overwrite the value stored under a key.

        Args:
            key: Slot name
            value: Full replacement value
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a slot. Removing an absent slot is not an error.

        Args:
            key: Slot name
        """
        pass
