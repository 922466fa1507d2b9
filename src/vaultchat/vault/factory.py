"""Factory for creating vault backends."""

from typing import Any

from .base import Vault


def create_vault(backend: str = "local", **config: Any) -> Vault:
    """Create a vault backend.

    Args:
        backend: Backend type ("local" or "memory")
        **config: Backend-specific configuration
            For local:
                - root: str | Path (required)
            For memory:
                - files: dict[str, str] | None

    Returns:
        Vault instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    if backend == "local":
        if "root" not in config:
            raise TypeError("Local vault requires 'root' in config")
        from .local import LocalVault
        return LocalVault(**config)

    elif backend == "memory":
        from .in_memory import InMemoryVault
        return InMemoryVault(**config)

    raise ValueError(
        f"Unsupported vault backend: {backend}. "
        f"Supported backends: local, memory"
    )
