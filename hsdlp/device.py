"""Device selection for the torch factorization backend."""

from __future__ import annotations

import torch


class Device:
    """Target torch device and dtype for normal-equations factorizations."""

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        dtype: torch.dtype = torch.float64,
    ) -> None:
        self.name = name
        self.torch_device = torch_device
        self.dtype = dtype

    def as_torch_device(self) -> torch.device:
        return self.torch_device


def device(name: str) -> Device:
    """
    Resolve ``"cpu"`` or ``"cuda"`` to a float64 :class:`Device`.

    Raises:
        RuntimeError: If CUDA is requested but unavailable.
        ValueError: For any other name.
    """
    if name == "cuda":
        if not torch.cuda.is_available():
            raise RuntimeError("CUDA device requested but CUDA is not available")
        return Device("cuda", torch.device("cuda"))
    if name != "cpu":
        raise ValueError(f"Unsupported device name: {name!r}. Use 'cpu' or 'cuda'.")
    return Device("cpu", torch.device("cpu"))


def default_device() -> Device:
    return device("cpu")


__all__ = ["Device", "device", "default_device"]
